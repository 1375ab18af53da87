# -*- coding: utf-8 -*-

import logging
from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse

from app import config
from app.actions import build_report_generator, generate_report_action
from app.analyzers.base import BaseReportGenerator
from app.errors import SubmissionInProgressError
from app.ui.page import FORM_FIELDS, EvaluatorPage
from app.ui.render import render_page
from app.ui.sessions import PageSessionStore

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

logger = logging.getLogger(__name__)

SESSION_COOKIE = "session_id"

app = FastAPI(title="GLUE Benchmark Evaluator", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

PAGE_SESSIONS = PageSessionStore()


def get_report_generator() -> BaseReportGenerator:
    return build_report_generator()


def _resolve_page(request: Request) -> tuple[str, EvaluatorPage]:
    return PAGE_SESSIONS.get_or_create(request.cookies.get(SESSION_COOKIE))


def _with_session(response: Response, session_id: str) -> Response:
    response.set_cookie(SESSION_COOKIE, session_id, httponly=True, samesite="lax")
    return response


def _render(
    page: EvaluatorPage,
    status_code: int = 200,
    form_values: Optional[Dict[str, Any]] = None,
    field_errors: Optional[Dict[str, str]] = None,
) -> HTMLResponse:
    toasts = page.notifier.drain() if hasattr(page.notifier, "drain") else []
    html = render_page(page, form_values=form_values, field_errors=field_errors, toasts=toasts)
    return HTMLResponse(content=html, status_code=status_code)


# =============================================================================
# PAGE
# =============================================================================


@app.get("/", response_class=HTMLResponse)
async def evaluator_page(request: Request):
    session_id, page = _resolve_page(request)
    form_values = page.last_values.model_dump(by_alias=True) if page.last_values else None
    return _with_session(_render(page, form_values=form_values), session_id)


@app.post("/", response_class=HTMLResponse)
async def submit_benchmark(
    request: Request,
    generator: BaseReportGenerator = Depends(get_report_generator),
):
    session_id, page = _resolve_page(request)
    form = await request.form()
    raw = {field: str(form.get(field) or "") for field in FORM_FIELDS}

    values, field_errors = EvaluatorPage.validate_form(raw)
    if values is None:
        logger.info("Form doğrulaması başarısız: %s", ", ".join(sorted(field_errors)))
        response = _render(page, status_code=422, form_values=raw, field_errors=field_errors)
        return _with_session(response, session_id)

    try:
        await page.submit(values, generator)
    except SubmissionInProgressError:
        logger.warning("Oturum %s için devam eden bir istek var, yeni gönderim reddedildi", session_id)
        return _with_session(_render(page, status_code=409, form_values=raw), session_id)

    return _with_session(RedirectResponse(url="/", status_code=303), session_id)


@app.get("/report/download")
async def download_report(request: Request):
    session_id, page = _resolve_page(request)
    download = page.download()
    if download is None:
        return _with_session(Response(status_code=204), session_id)

    return _with_session(
        Response(
            content=download.content,
            media_type=download.media_type,
            headers={"Content-Disposition": f"attachment; filename=\"{download.filename}\""},
        ),
        session_id,
    )


# =============================================================================
# API
# =============================================================================


@app.get("/api/health")
async def health():
    return {"message": "GLUE Benchmark Evaluator API", "version": app.version}


@app.post("/api/generate-report")
async def generate_report(
    request: Request,
    generator: BaseReportGenerator = Depends(get_report_generator),
):
    """Boundary of ``generateReportAction``; always answers with a result object."""
    try:
        values: Any = await request.json()
    except ValueError:
        logger.info("Rapor isteği geçerli JSON içermiyor")
        values = None

    result = await generate_report_action(values, generator)
    return JSONResponse(content=result.model_dump())


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
