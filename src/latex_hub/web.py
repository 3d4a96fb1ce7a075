"""FastAPI interface for LaTeX journal detection and conversion.

Run with:
    uvicorn latex_hub.web:app --reload
"""
from __future__ import annotations

import asyncio
import tempfile
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import BackgroundTasks, FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import FileResponse, HTMLResponse, JSONResponse

from .app import LatexConversionApp
from .config import load_settings
from .errors import ProjectError
from .exporters import analysis_to_dict, conversion_to_dict
from .logging_config import get_logger, setup_logging
from .project import cleanup_temp_dir
from .report import render_report

logger = get_logger(__name__)

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(load_settings().log_level)
    logger.info("LaTeX Hub web app starting")
    yield


app = FastAPI(
    title="LaTeX Hub",
    description="Detect journal templates and convert LaTeX projects to Word",
    lifespan=lifespan,
)


def _build_checker() -> LatexConversionApp:
    return LatexConversionApp(settings=load_settings())


def _layout(content: str) -> str:
    """Wrap provided content in a Tailwind-powered HTML page."""

    return f"""
    <!doctype html>
    <html lang=\"en\" class=\"h-full bg-gray-50\">
    <head>
        <meta charset=\"utf-8\" />
        <title>LaTeX Hub</title>
        <link href=\"https://cdn.jsdelivr.net/npm/tailwindcss@3.4.4/dist/tailwind.min.css\" rel=\"stylesheet\" />
    </head>
    <body class=\"min-h-full py-10\">
        <div class=\"max-w-3xl mx-auto px-4\">
            <div class=\"bg-white shadow rounded-lg p-6\">
                <h1 class=\"text-3xl font-semibold text-gray-900\">LaTeX to Word</h1>
                <p class=\"text-gray-600 mt-2\">Upload a .tex file or a zipped LaTeX project. The journal template is detected automatically.</p>
                {content}
            </div>
        </div>
    </body>
    </html>
    """


def _form_page() -> str:
    form = """
    <form action=\"/convert\" method=\"post\" enctype=\"multipart/form-data\" class=\"bg-gray-50 border border-gray-200 rounded-lg p-4 mt-6\">
        <label class=\"block text-sm font-medium text-gray-700 mb-2\" for=\"file\">LaTeX source or ZIP</label>
        <input type=\"file\" name=\"file\" accept=\".tex,.latex,.zip\" required class=\"block w-full text-sm text-gray-800\" />
        <label class=\"block text-sm font-medium text-gray-700 mt-3 mb-2\" for=\"manual_journal\">Journal override</label>
        <select name=\"manual_journal\" class=\"border border-gray-300 rounded-md p-2 text-sm\">
            <option value=\"\">Auto-detect</option>
            <option value=\"elsevier\">Elsevier</option>
            <option value=\"springer nature\">Springer Nature</option>
            <option value=\"ieee\">IEEE</option>
            <option value=\"acm\">ACM</option>
            <option value=\"generic\">Generic</option>
        </select>
        <button type=\"submit\" class=\"mt-4 inline-flex items-center px-4 py-2 bg-indigo-600 text-white rounded-md shadow hover:bg-indigo-700\">Convert</button>
    </form>
    """
    return _layout(form)


async def _load(checker: LatexConversionApp, file: UploadFile, temp_dir: str):
    data = await file.read()
    try:
        return await asyncio.to_thread(checker.load_upload, data, file.filename or "", temp_dir)
    except ProjectError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@app.get("/", response_class=HTMLResponse)
async def home() -> HTMLResponse:
    """Serve the upload form."""

    return HTMLResponse(_form_page())


@app.get("/health")
async def health() -> Dict[str, Any]:
    checker = _build_checker()
    installed = await asyncio.to_thread(checker.converter.is_installed)
    return {"success": True, "pandoc": installed}


@app.post("/analyze")
async def analyze(file: UploadFile = File(...)) -> JSONResponse:
    """Detect the journal family and check referenced assets without converting."""

    checker = _build_checker()
    temp_dir = tempfile.mkdtemp(prefix="latex-hub-")
    try:
        contents = await _load(checker, file, temp_dir)
        analysis = await asyncio.to_thread(checker.analyze_project, contents)
        payload = analysis_to_dict(analysis)
        payload["report"] = render_report(analysis)
        payload["success"] = True
        return JSONResponse(payload)
    finally:
        await asyncio.to_thread(cleanup_temp_dir, temp_dir)


@app.post("/convert")
async def convert(
    tasks: BackgroundTasks,
    file: UploadFile = File(...),
    manual_journal: Optional[str] = Form(None),
):
    """Convert an uploaded project and stream back the DOCX."""

    checker = _build_checker()
    if not await asyncio.to_thread(checker.converter.is_installed):
        raise HTTPException(status_code=500, detail="Pandoc is not installed on the server. Please contact support.")

    temp_dir = tempfile.mkdtemp(prefix="latex-hub-")
    try:
        contents = await _load(checker, file, temp_dir)
        result = await asyncio.to_thread(
            checker.convert,
            contents,
            Path(temp_dir) / "output",
            manual_journal=manual_journal or None,
        )
    except Exception:
        await asyncio.to_thread(cleanup_temp_dir, temp_dir)
        raise

    if not result.success or not result.output_file:
        await asyncio.to_thread(cleanup_temp_dir, temp_dir)
        payload = conversion_to_dict(result)
        payload["error"] = result.error_message
        return JSONResponse(payload, status_code=422)

    logger.info("Converted %s (%s) in %d ms", file.filename, result.detected_journal, result.duration_ms)
    tasks.add_task(cleanup_temp_dir, temp_dir)
    download_name = f"{Path(file.filename or 'document').stem}.docx"
    return FileResponse(
        result.output_file,
        media_type=DOCX_MEDIA_TYPE,
        filename=download_name,
        headers={
            "X-Detected-Journal": result.detected_journal or "",
            "X-Document-Class": result.document_class or "",
            "X-Warning-Count": str(result.warning_count),
        },
    )


def main() -> None:
    """Run the FastAPI app using uvicorn."""

    import uvicorn

    uvicorn.run("latex_hub.web:app", host="0.0.0.0", port=8000, reload=False)


__all__ = ["app", "main"]
