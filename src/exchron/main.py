from functools import lru_cache
from typing import Optional

from fastapi import Depends, FastAPI, File, HTTPException, Request, UploadFile
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse, Response
from starlette.concurrency import run_in_threadpool

from exchron.adapters.csv_adapter import parse_csv
from exchron.config.settings import Settings, load_settings
from exchron.proxy.handlers import handle_dl_prediction, handle_ml_prediction
from exchron.reports.dataset_report import DatasetReportGenerator
from exchron.standards.koi_features import Datasource, LIGHT_CURVE_MODELS
from exchron.utils.exceptions import (
    DatasetParseError,
    DatasetValidationError,
    PredictionRequestError,
)
from exchron.views import pages

app = FastAPI(
    title="Exchron Dashboard",
    version="1.0.0"
)


@lru_cache()
def get_settings() -> Settings:
    return load_settings()


def _decode_upload(file: UploadFile) -> str:
    return file.file.read().decode("utf-8-sig", errors="replace")


def _parse_upload(file: UploadFile, settings: Settings, max_rows: Optional[int] = None):
    try:
        return parse_csv(
            _decode_upload(file),
            filename=file.filename or "dataset.csv",
            max_rows=max_rows or settings.max_upload_rows,
        )
    except DatasetParseError as e:
        detail = {"error": str(e)}
        if isinstance(e, DatasetValidationError):
            detail["errors"] = e.errors
        raise HTTPException(status_code=400, detail=detail)


async def _read_json(request: Request):
    try:
        return await request.json()
    except ValueError:
        raise PredictionRequestError("Request body must be valid JSON")


# ==========================================================
# PREDICTION PROXY
# ==========================================================

@app.post("/api/ml-predict")
async def ml_predict(request: Request, settings: Settings = Depends(get_settings)):
    try:
        payload = await _read_json(request)
    except PredictionRequestError as e:
        return JSONResponse(status_code=e.status_code, content=e.to_dict())

    status_code, body = await run_in_threadpool(handle_ml_prediction, payload, settings, request)
    return JSONResponse(status_code=status_code, content=body)


@app.post("/api/dl-predict")
async def dl_predict(request: Request, settings: Settings = Depends(get_settings)):
    try:
        payload = await _read_json(request)
    except PredictionRequestError as e:
        return JSONResponse(status_code=e.status_code, content=e.to_dict())

    status_code, body = await run_in_threadpool(handle_dl_prediction, payload, settings, request)
    return JSONResponse(status_code=status_code, content=body)


@app.get("/api/classroom/k2")
def k2_dataset():
    return JSONResponse(
        status_code=410,
        content={
            "error": "K2 dataset deprecated",
            "message": (
                "The K2 classroom dataset has been removed. "
                "Use kepler (KOI) or tess data sources."
            ),
        },
    )


# ==========================================================
# DATASET INGESTION
# ==========================================================

@app.post("/api/datasets/parse")
def parse_dataset(
    file: UploadFile = File(...),
    max_rows: Optional[int] = None,
    settings: Settings = Depends(get_settings),
):
    parsed = _parse_upload(file, settings, max_rows=max_rows)
    return parsed.to_dict()


@app.post("/api/datasets/report")
def dataset_report(
    file: UploadFile = File(...),
    max_rows: Optional[int] = None,
    settings: Settings = Depends(get_settings),
):
    parsed = _parse_upload(file, settings, max_rows=max_rows)
    markdown = DatasetReportGenerator(parsed).generate_markdown()
    report_name = parsed.raw_dataset.name.rsplit(".", 1)[0] or "dataset"
    return Response(
        content=markdown,
        media_type="text/markdown",
        headers={
            "Content-Disposition": f'attachment; filename="{report_name}.md"'
        },
    )


@app.get("/health")
def health(settings: Settings = Depends(get_settings)):
    return {
        "status": "ok",
        "ml_api_url": settings.ml_api_url,
        "dl_api_url": settings.dl_api_url,
    }


# ==========================================================
# PAGES
# ==========================================================

@app.get("/")
def index():
    return RedirectResponse(url="/playground/overview")


@app.get("/playground/overview", response_class=HTMLResponse)
def overview_page():
    return pages.render_overview()


@app.get("/playground/data-input", response_class=HTMLResponse)
def data_input_page():
    return pages.render_data_input()


@app.post("/playground/predict", response_class=HTMLResponse)
async def predict_page(request: Request, settings: Settings = Depends(get_settings)):
    form = await request.form()
    mode = str(form.get("mode", ""))
    model = str(form.get("model", "")).lower()

    try:
        if mode == "light-curve" or model in LIGHT_CURVE_MODELS:
            payload = pages.build_light_curve_payload(model, str(form.get("kepid", "")))
            handler = handle_dl_prediction
        elif mode == Datasource.MANUAL:
            payload = pages.build_manual_payload(model, form)
            handler = handle_ml_prediction
        elif mode == Datasource.UPLOAD:
            upload = form.get("file")
            if upload is None or not hasattr(upload, "read"):
                raise PredictionRequestError("Please choose a CSV file to upload")
            csv_text = (await upload.read()).decode("utf-8-sig", errors="replace")
            payload = pages.build_upload_payload(model, csv_text)
            handler = handle_ml_prediction
        elif mode == Datasource.PRELOADED:
            payload = pages.build_preloaded_payload(model, str(form.get("dataset", "")))
            handler = handle_ml_prediction
        else:
            raise PredictionRequestError(
                'Invalid datasource. Must be "manual", "upload", or "pre-loaded"'
            )
    except PredictionRequestError as e:
        return HTMLResponse(pages.render_results(error=e.message, details=e.details), status_code=400)

    status_code, body = await run_in_threadpool(handler, payload, settings, request)
    if status_code != 200:
        return HTMLResponse(
            pages.render_results(error=body.get("error"), details=body.get("details")),
            status_code=status_code,
        )

    summary = pages.summarize_prediction(body, model=model, datasource=payload.get("datasource", "light-curve"))
    return HTMLResponse(pages.render_results(summary=summary))


@app.get("/classroom/data-input", response_class=HTMLResponse)
def classroom_page():
    return pages.render_classroom()


@app.post("/classroom/data-input", response_class=HTMLResponse)
def classroom_upload(file: UploadFile = File(...), settings: Settings = Depends(get_settings)):
    try:
        parsed = parse_csv(
            _decode_upload(file),
            filename=file.filename or "dataset.csv",
            max_rows=settings.max_upload_rows,
        )
    except DatasetParseError as e:
        # Shown verbatim
        return HTMLResponse(pages.render_classroom(error=str(e)), status_code=400)
    return HTMLResponse(pages.render_classroom(parsed=parsed))
