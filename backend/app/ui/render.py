# -*- coding: utf-8 -*-
"""Server side HTML rendering of the evaluator page."""

from html import escape
from string import Template
from typing import Any, Dict, Iterable, List, Mapping, Optional

from app import config
from app.schemas import GLUE_DATASETS
from app.ui.notifier import Toast
from app.ui.page import EvaluatorPage

PAGE_CSS = """
body { font-family: system-ui, sans-serif; margin: 0; background: #f6f7fb; color: #1f2330; }
main { max-width: 1200px; margin: 0 auto; padding: 2rem 1rem; }
header { text-align: center; margin-bottom: 3rem; }
.grid { display: grid; grid-template-columns: repeat(auto-fit, minmax(380px, 1fr)); gap: 2rem; align-items: start; }
.card { background: #fff; border: 1px solid #e2e5ee; border-radius: 12px; padding: 1.5rem; margin-bottom: 2rem; }
.card.placeholder { border-style: dashed; text-align: center; }
.field { margin-bottom: 1.5rem; }
.field label { display: block; font-weight: 600; margin-bottom: .5rem; }
.field textarea { width: 100%; min-height: 200px; font-family: monospace; box-sizing: border-box; }
.field .hint { color: #6b7080; font-size: .85rem; }
.field .error { color: #c62828; font-size: .85rem; }
button, .button { display: block; width: 100%; padding: .75rem; border: 0; border-radius: 8px; background: #3949ab; color: #fff; text-align: center; text-decoration: none; font-weight: 600; cursor: pointer; }
button[disabled] { opacity: .6; cursor: wait; }
pre { white-space: pre-wrap; word-break: break-word; font-family: monospace; font-size: .9rem; }
.submitted-outputs { max-height: 12rem; overflow-y: auto; background: #f1f2f6; border-radius: 8px; padding: .75rem; }
.skeleton { background: #e4e6ee; border-radius: 6px; height: 1rem; margin-bottom: .75rem; }
.skeleton.title { height: 2rem; width: 75%; }
.toasts { position: fixed; right: 1rem; bottom: 1rem; display: grid; gap: .5rem; }
.toast { background: #fff; border-left: 4px solid #2e7d32; border-radius: 8px; padding: .75rem 1rem; box-shadow: 0 4px 12px rgba(0,0,0,.15); }
.toast.destructive { border-left-color: #c62828; }
[hidden] { display: none !important; }
"""

PAGE_SCRIPT = """
document.addEventListener("DOMContentLoaded", function () {
  var form = document.querySelector("[data-benchmark-form]");
  if (form) {
    form.addEventListener("submit", function () {
      var button = form.querySelector("button[type=submit]");
      button.disabled = true;
      button.textContent = "Generating Report...";
      document.querySelectorAll("[data-result-card]").forEach(function (card) { card.hidden = true; });
      var skeleton = document.querySelector("[data-pending-card]");
      if (skeleton) { skeleton.hidden = false; }
    });
  }
  document.querySelectorAll("[data-toast]").forEach(function (toast) {
    setTimeout(function () { toast.remove(); }, 5000);
  });
});
"""

PAGE_TEMPLATE = Template(
    """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>AI Model Evaluator</title>
    <style>$page_css</style>
</head>
<body>
<main>
    <header>
        <h1>AI Model Evaluator</h1>
        <p>Benchmark your AI model's performance against standard GLUE datasets with our powerful evaluation tool.</p>
    </header>
    <div class="grid">
        <section class="card">
            <h2>Start Benchmarking</h2>
            <p>Provide your model's output and select a GLUE dataset to begin.</p>
            <form method="post" action="/" data-benchmark-form>
                <div class="field">
                    <label for="modelOutputs">Model Outputs</label>
                    <textarea id="modelOutputs" name="modelOutputs" maxlength="$max_chars" placeholder="Paste your model outputs here (e.g., in JSON or CSV format)"$disabled>$model_outputs</textarea>
                    <p class="hint">Provide the raw output from your AI model for evaluation.</p>
                    $model_outputs_error
                </div>
                <div class="field">
                    <label for="glueDataset">GLUE Benchmark Dataset</label>
                    <select id="glueDataset" name="glueDataset"$disabled>
                        <option value="">Select a dataset</option>
                        $dataset_options
                    </select>
                    <p class="hint">Choose the GLUE dataset for comparison.</p>
                    $glue_dataset_error
                </div>
                <button type="submit"$disabled>$submit_label</button>
            </form>
        </section>
        <div>
            <section class="card" data-pending-card$pending_hidden>
                <h2>Generating Report</h2>
                <p>Please wait while we analyze the data...</p>
                <div class="skeleton title"></div>
                <div class="skeleton"></div>
                <div class="skeleton"></div>
                <div class="skeleton" style="width: 83%"></div>
            </section>
            $result_section
        </div>
    </div>
</main>
<div class="toasts" aria-live="polite">$toasts</div>
<script defer>$page_script</script>
</body>
</html>
"""
)


def _build_dataset_options(selected: str) -> str:
    options: List[str] = []
    for dataset in GLUE_DATASETS:
        selected_attr = " selected" if dataset == selected else ""
        options.append(
            f"<option value=\"{escape(dataset)}\"{selected_attr}>{escape(dataset)}</option>"
        )
    return "\n".join(options)


def _build_field_error(message: Optional[str]) -> str:
    if not message:
        return ""
    return f"<p class=\"error\" role=\"alert\">{escape(message)}</p>"


def _build_toasts_html(toasts: Iterable[Toast]) -> str:
    items = []
    for toast in toasts:
        items.append(
            """
            <div class=\"toast {kind}\" role=\"status\" data-toast>
                <strong>{title}</strong>
                <div>{message}</div>
            </div>
            """.strip().format(
                kind=escape(toast.kind),
                title=escape(toast.title),
                message=escape(toast.message),
            )
        )
    return "".join(items)


def _build_result_section(page: EvaluatorPage) -> str:
    if page.report and page.submitted:
        return f"""
            <section class=\"card\" data-result-card>
                <h2>Submitted Data</h2>
                <p>This is the data you provided for benchmarking.</p>
                <h3>GLUE Dataset</h3>
                <p class=\"submitted-dataset\">{escape(page.submitted.glue_dataset)}</p>
                <h3>Model Outputs</h3>
                <div class=\"submitted-outputs\"><pre>{escape(page.submitted.model_outputs)}</pre></div>
            </section>
            <section class=\"card\" data-result-card>
                <h2>Benchmark Report</h2>
                <p>Here is the detailed analysis of your model's performance.</p>
                <div class=\"report-body\"><pre>{escape(page.report)}</pre></div>
                <a class=\"button\" href=\"/report/download\" download>Download Report</a>
            </section>
        """

    if page.is_pending:
        return ""

    return """
            <section class=\"card placeholder\" data-result-card>
                <h3>Your Report Awaits</h3>
                <p>Fill out the form to generate your benchmark report.</p>
            </section>
        """


def render_page(
    page: EvaluatorPage,
    form_values: Optional[Mapping[str, Any]] = None,
    field_errors: Optional[Dict[str, str]] = None,
    toasts: Iterable[Toast] = (),
) -> str:
    """Render the full evaluator page for the current page state."""

    form_values = form_values or {}
    field_errors = field_errors or {}
    pending = page.is_pending

    return PAGE_TEMPLATE.substitute(
        page_css=PAGE_CSS,
        page_script=PAGE_SCRIPT,
        max_chars=config.MODEL_OUTPUTS_MAX_CHARS,
        model_outputs=escape(str(form_values.get("modelOutputs", ""))),
        model_outputs_error=_build_field_error(field_errors.get("modelOutputs")),
        dataset_options=_build_dataset_options(str(form_values.get("glueDataset", ""))),
        glue_dataset_error=_build_field_error(field_errors.get("glueDataset")),
        disabled=" disabled" if pending else "",
        submit_label="Generating Report..." if pending else "Run Benchmark",
        pending_hidden="" if pending else " hidden",
        result_section=_build_result_section(page),
        toasts=_build_toasts_html(toasts),
    )


__all__ = ["render_page"]
