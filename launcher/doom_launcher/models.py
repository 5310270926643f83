from __future__ import annotations
import re
from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, AliasChoices, ConfigDict, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError
from .logging_setup import get_logger

log = get_logger("doom.launcher.models")

# modId marker for entries that live in the shared catalog instead of a mod record
CATALOG_MOD_ID = "0"


def base_name(path: str) -> str:
    """Last path component, accepting both '/' and '\\' separators."""
    return re.split(r"[\\/]", path)[-1] or path


def _id_to_str(v: Any) -> Any:
    # legacy documents carry integer ids
    if isinstance(v, bool):
        return v
    if isinstance(v, int):
        return str(v)
    return v


class FileType(str, Enum):
    WAD = "wad"
    PK3 = "pk3"
    DEH = "deh"
    BEX = "bex"
    ZIP = "zip"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str) -> "FileType":
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.OTHER

    @classmethod
    def from_path(cls, path: str) -> "FileType":
        name = base_name(path)
        return cls.parse(name.rsplit(".", 1)[-1]) if "." in name else cls.OTHER


class ModFile(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    name: Optional[str] = None
    file_name: Optional[str] = Field(default=None, alias="fileName")
    file_path: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("filePath", "path", "file_path"),
        serialization_alias="filePath",
    )
    file_type: Optional[FileType] = Field(
        default=None,
        validation_alias=AliasChoices("fileType", "type", "file_type"),
        serialization_alias="fileType",
    )
    load_order: Optional[int] = Field(default=None, alias="loadOrder")
    is_required: bool = Field(
        default=False,
        validation_alias=AliasChoices("isRequired", "required", "is_required"),
        serialization_alias="isRequired",
    )
    mod_id: Optional[str] = Field(default=None, alias="modId")

    @field_validator("id", "mod_id", mode="before")
    @classmethod
    def _coerce_ids(cls, v):
        return _id_to_str(v)

    @field_validator("file_type", mode="before")
    @classmethod
    def _normalize_type(cls, v):
        if v is None or isinstance(v, FileType):
            return v
        if not str(v).strip():
            return None
        return FileType.parse(v)

    @field_validator("is_required", mode="before")
    @classmethod
    def _none_is_false(cls, v):
        return False if v is None else v

    @model_validator(mode="after")
    def _fill_derived(self) -> "ModFile":
        if not self.name and self.file_name:
            self.name = self.file_name
        if self.file_type is None and self.file_path:
            self.file_type = FileType.from_path(self.file_path)
        return self

    @property
    def has_path(self) -> bool:
        return bool(self.file_path and self.file_path.strip())


class Mod(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    title: str = Field(default="", validation_alias=AliasChoices("title", "name"), serialization_alias="title")
    description: str = ""
    version: Optional[str] = None
    author: Optional[str] = None
    website: Optional[str] = None
    release_date: Optional[str] = Field(default=None, alias="releaseDate")
    doom_version_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("doomVersionId", "versionId", "doom_version_id"),
        serialization_alias="doomVersionId",
    )
    source_port: Optional[str] = Field(default=None, alias="sourcePort")
    save_directory: Optional[str] = Field(default=None, alias="saveDirectory")
    launch_parameters: Optional[str] = Field(default=None, alias="launchParameters")
    screenshot_path: Optional[str] = Field(default=None, alias="screenshotPath")
    poster_image: Optional[str] = Field(default=None, alias="posterImage")
    moddb_id: Optional[int] = Field(default=None, alias="moddbId")
    files: List[ModFile] = Field(default_factory=list)

    @field_validator("id", "doom_version_id", mode="before")
    @classmethod
    def _coerce_ids(cls, v):
        return _id_to_str(v)

    @field_validator("title", "description", mode="before")
    @classmethod
    def _none_is_empty(cls, v):
        return "" if v is None else v

    @field_validator("files", mode="before")
    @classmethod
    def _files_always_list(cls, v):
        # a missing or mangled file list never makes the record unreadable
        if not isinstance(v, list):
            return []
        files: List[ModFile] = []
        for i, item in enumerate(v):
            if isinstance(item, ModFile):
                files.append(item)
                continue
            try:
                files.append(ModFile.model_validate(item))
            except PydanticValidationError as e:
                log.warning("Dropping unreadable file entry #%d: %s", i, e)
        return files


class DoomVersion(BaseModel):
    """Base game profile (IWAD + default arguments)."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    slug: str
    icon: Optional[str] = None
    executable: Optional[str] = None
    args: str = ""
    parameters: str = ""
    default_iwad: Optional[str] = Field(default=None, alias="defaultIwad")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v):
        return _id_to_str(v)

    @field_validator("args", "parameters", mode="before")
    @classmethod
    def _none_is_empty(cls, v):
        return "" if v is None else v


class AppSettings(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    gz_doom_path: Optional[str] = Field(default="gzdoom", alias="gzDoomPath")
    theme: str = "dark"
    savegames_path: Optional[str] = Field(default="~/.config/gzdoom/saves", alias="savegamesPath")
    screenshots_path: Optional[str] = Field(default="~/Pictures/DoomLauncher/screenshots", alias="screenshotsPath")
    default_source_port: Optional[str] = Field(default="GZDoom", alias="defaultSourcePort")


class LaunchOptions(BaseModel):
    """Per-launch extras appended after the mod's own parameters."""
    model_config = ConfigDict(populate_by_name=True)

    custom_args: Optional[str] = Field(default=None, alias="customArgs")
    skill: Optional[int] = Field(default=None, ge=1, le=5)
    warp: Optional[str] = None


class LaunchResult(BaseModel):
    success: bool
    message: Optional[str] = None


class ModPayload(BaseModel):
    """Request body of POST/PUT /api/mods."""
    mod: Mod
    files: Optional[List[ModFile]] = None


def dump(model: BaseModel) -> Dict[str, Any]:
    """JSON-ready dict with canonical camelCase keys."""
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)
