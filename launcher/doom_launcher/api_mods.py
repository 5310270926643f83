"""
Mod and mod-file catalog endpoints.

Endpoints:
- GET    /api/mods                          - List mods (?version=&search=)
- GET    /api/mods/{id}                     - Get mod with its files
- POST   /api/mods                          - Create mod ({mod, files})
- PUT    /api/mods/{id}                     - Replace mod ({mod, files})
- DELETE /api/mods/{id}                     - Delete mod
- POST   /api/mods/{id}/launch              - Launch (optional {customArgs, skill, warp})
- GET    /api/mods/{id}/plan                - Dry-run launch plan
- GET    /api/mod-files/catalog             - List catalog
- POST   /api/mod-files/catalog             - Add file to catalog
- GET    /api/mod-files/catalog/by-type/{t} - Catalog entries of one file type
"""

from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Body, HTTPException, Query, Response
from pydantic import ValidationError as PydanticValidationError

from .errors import AlreadyExists, CorruptRecord, LauncherError, NotFound, ValidationError
from .models import LaunchOptions, ModFile, ModPayload, dump
from .orchestrator import Orchestrator
from .logging_setup import get_logger

log = get_logger("doom.launcher.api")


def to_http(e: LauncherError) -> HTTPException:
    """Map a domain error onto the HTTP status the UI expects."""
    if isinstance(e, AlreadyExists):
        return HTTPException(status_code=409, detail=str(e))
    if isinstance(e, ValidationError):
        return HTTPException(status_code=400, detail=str(e))
    if isinstance(e, NotFound):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, CorruptRecord):
        log.error("Corrupt record: %s", e)
    return HTTPException(status_code=500, detail=str(e))


class ModsAPI:
    """API handlers for mods and the shared file catalog."""

    def __init__(self, orch: Orchestrator):
        self.orch = orch

    @staticmethod
    def _parse_payload(payload: Optional[dict]) -> ModPayload:
        if not isinstance(payload, dict) or not isinstance(payload.get("mod"), dict):
            raise HTTPException(status_code=400, detail="Request body must be {mod, files}")
        try:
            parsed = ModPayload.model_validate(payload)
        except PydanticValidationError as e:
            raise HTTPException(status_code=400, detail=str(e))
        if not parsed.mod.title.strip():
            raise HTTPException(status_code=400, detail="Mod title is required")
        return parsed

    @staticmethod
    def _parse_options(payload: Optional[dict]) -> Optional[LaunchOptions]:
        if not payload:
            return None
        try:
            return LaunchOptions.model_validate(payload)
        except PydanticValidationError as e:
            raise HTTPException(status_code=400, detail=str(e))

    def _store(self, parsed: ModPayload, mod_id: Optional[str] = None) -> Dict[str, Any]:
        files = parsed.files if parsed.files is not None else parsed.mod.files
        mod = parsed.mod.model_copy(update={"files": files})
        if mod_id is not None:
            mod = mod.model_copy(update={"id": mod_id})
        try:
            saved = self.orch.mods.save(mod)
        except LauncherError as e:
            raise to_http(e)
        return dump(saved)

    def list_mods(self, version: Optional[str] = None, search: Optional[str] = None) -> List[Dict[str, Any]]:
        """GET /api/mods"""
        return [dump(m) for m in self.orch.mods.list(version_id=version, search=search)]

    def get_mod(self, mod_id: str) -> Dict[str, Any]:
        """GET /api/mods/{id} - the record plus its files, files also listed separately."""
        try:
            mod = self.orch.mods.get(mod_id)
        except LauncherError as e:
            raise to_http(e)
        data = dump(mod)
        return {"mod": data, "files": data.get("files", [])}

    def create_mod(self, payload: Optional[dict]) -> Dict[str, Any]:
        """POST /api/mods - always assigns a fresh id."""
        parsed = self._parse_payload(payload)
        parsed.mod.id = None
        return self._store(parsed)

    def update_mod(self, mod_id: str, payload: Optional[dict]) -> Dict[str, Any]:
        """PUT /api/mods/{id} - full replacement; an unknown id creates the record."""
        return self._store(self._parse_payload(payload), mod_id=mod_id)

    def delete_mod(self, mod_id: str) -> None:
        try:
            deleted = self.orch.mods.delete(mod_id)
        except LauncherError as e:
            raise to_http(e)
        if not deleted:
            raise HTTPException(status_code=404, detail=f"Mod {mod_id} not found")

    def launch_mod(self, mod_id: str, payload: Optional[dict] = None) -> Dict[str, Any]:
        """POST /api/mods/{id}/launch - configuration and spawn failures are success=false, not errors."""
        options = self._parse_options(payload)
        try:
            result = self.orch.launch(mod_id, options)
        except LauncherError as e:
            raise to_http(e)
        return result.model_dump(exclude_none=True)

    def plan_mod(self, mod_id: str, payload: Optional[dict] = None) -> Dict[str, Any]:
        options = self._parse_options(payload)
        try:
            return self.orch.plan(mod_id, options).to_dict()
        except LauncherError as e:
            raise to_http(e)

    def get_catalog(self) -> List[Dict[str, Any]]:
        return [dump(f) for f in self.orch.catalog.list()]

    def get_catalog_by_type(self, file_type: str) -> List[Dict[str, Any]]:
        return [dump(f) for f in self.orch.catalog.by_type(file_type)]

    def add_to_catalog(self, payload: Optional[dict]) -> Dict[str, Any]:
        """POST /api/mod-files/catalog - returns the existing entry when the path is known."""
        if not isinstance(payload, dict):
            raise HTTPException(status_code=400, detail="Request body must be a JSON object")
        try:
            entry = self.orch.catalog.add_if_absent(ModFile.model_validate(payload))
        except PydanticValidationError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except LauncherError as e:
            raise to_http(e)
        return dump(entry)


def register_mods_routes(app, orch: Orchestrator):
    """Register mod and catalog routes to FastAPI app."""
    api = ModsAPI(orch)
    router = APIRouter(prefix="/api", tags=["mods"])

    @router.get("/mods")
    def list_mods(
        version: Optional[str] = Query(default=None, description="Doom version id"),
        search: Optional[str] = Query(default=None, description="Case-insensitive title filter"),
    ):
        return api.list_mods(version=version, search=search)

    @router.get("/mods/{mod_id}")
    def get_mod(mod_id: str):
        return api.get_mod(mod_id)

    @router.post("/mods", status_code=201)
    def create_mod(payload: dict = Body(default=None)):
        return api.create_mod(payload)

    @router.put("/mods/{mod_id}")
    def update_mod(mod_id: str, payload: dict = Body(default=None)):
        return api.update_mod(mod_id, payload)

    @router.delete("/mods/{mod_id}", status_code=204)
    def delete_mod(mod_id: str):
        api.delete_mod(mod_id)
        return Response(status_code=204)

    @router.post("/mods/{mod_id}/launch")
    def launch_mod(mod_id: str, payload: Optional[dict] = Body(default=None)):
        return api.launch_mod(mod_id, payload)

    @router.get("/mods/{mod_id}/plan")
    def plan_mod(
        mod_id: str,
        skill: Optional[int] = Query(default=None, ge=1, le=5),
        warp: Optional[str] = None,
    ):
        options = {k: v for k, v in {"skill": skill, "warp": warp}.items() if v is not None}
        return api.plan_mod(mod_id, options)

    # Catalog
    @router.get("/mod-files/catalog")
    def get_catalog():
        return api.get_catalog()

    @router.get("/mod-files/catalog/by-type/{file_type}")
    def get_catalog_by_type(file_type: str):
        return api.get_catalog_by_type(file_type)

    @router.post("/mod-files/catalog", status_code=201)
    def add_to_catalog(payload: dict = Body(default=None)):
        return api.add_to_catalog(payload)

    app.include_router(router)
