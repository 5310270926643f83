from __future__ import annotations
from pathlib import Path
from typing import Optional
from fastapi import Body, FastAPI, HTTPException, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from . import __version__
from .settings import Settings
from .orchestrator import Orchestrator
from .errors import LauncherError
from .models import dump
from .dialogs import DialogHost, select_dialog_host
from .bundles import GameConfigBundles
from .api_mods import register_mods_routes, to_http


class ImportRequest(BaseModel):
    filePath: str
    merge: bool = False


def create_app(settings: Settings, dialog_host: Optional[DialogHost] = None) -> FastAPI:
    app = FastAPI(title="Doom Launcher API", version=__version__)
    orch = Orchestrator(settings)
    orch.prepare_environment()
    dialogs = dialog_host or select_dialog_host(settings)
    bundles = GameConfigBundles(orch.layout, orch.versions, orch.mods)
    app.state.orch = orch

    @app.exception_handler(RequestValidationError)
    async def bad_request(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})

    @app.get("/health")
    def health():
        return {"ok": True}

    # Doom versions
    @app.get("/api/versions")
    def list_versions():
        return [dump(v) for v in orch.versions.list()]

    @app.get("/api/versions/by-id/{version_id}")
    def get_version_by_id(version_id: str):
        try:
            return dump(orch.versions.get(version_id))
        except LauncherError as e:
            raise to_http(e)

    @app.get("/api/versions/{slug}")
    def get_version(slug: str):
        try:
            return dump(orch.versions.get_by_slug(slug))
        except LauncherError as e:
            raise to_http(e)

    # Settings
    @app.get("/api/settings")
    def get_settings():
        return orch.app_settings.load().model_dump(mode="json", by_alias=True)

    @app.put("/api/settings")
    def put_settings(payload: dict = Body(default=None)):
        if not isinstance(payload, dict):
            raise HTTPException(status_code=400, detail="Settings must be a JSON object")
        try:
            updated = orch.app_settings.update(payload)
        except LauncherError as e:
            raise to_http(e)
        return updated.model_dump(mode="json", by_alias=True)

    # File pickers
    @app.post("/api/dialog/open")
    def open_dialog(options: Optional[dict] = Body(default=None)):
        return dialogs.open_dialog(options or {})

    @app.post("/api/dialog/save")
    def save_dialog(options: Optional[dict] = Body(default=None)):
        return dialogs.save_dialog(options or {})

    # Game config bundles
    @app.get("/api/export/{slug}")
    def export_config(slug: str, path: Optional[str] = Query(default=None, description="Destination file")):
        try:
            out = bundles.export_config(slug, Path(path).expanduser() if path else None)
        except LauncherError as e:
            raise to_http(e)
        return {"filePath": str(out)}

    @app.post("/api/import")
    def import_config(req: ImportRequest):
        try:
            version, count = bundles.import_config(Path(req.filePath), merge=req.merge)
        except LauncherError as e:
            raise to_http(e)
        return {"success": True, "doomVersionId": version.id, "imported": count}

    register_mods_routes(app, orch)
    return app
