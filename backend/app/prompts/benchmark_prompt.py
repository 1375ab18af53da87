"""Prompt template for GLUE benchmark report generation."""

BENCHMARK_PROMPT_NAME = "generate_benchmark_report_prompt"

BENCHMARK_REPORT_PROMPT = """You are an AI model evaluation expert. Compare the provided AI model outputs against the specified GLUE benchmark dataset and generate a comprehensive benchmark report.

AI Model Outputs:
{model_outputs}

GLUE Benchmark Dataset:
{glue_dataset}

Include key metrics such as accuracy, precision, recall, and F1-score. Identify areas where the model excels and areas for improvement.

RESPONSE FORMAT:
{{
  "report": "The full benchmark report as Markdown."
}}

Return valid JSON only."""
