from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional


class ScriptOut(BaseModel):
    key: str
    scheme: str
    label: str
    group: str


class LanguageOut(BaseModel):
    code: str
    name: str


class ScriptsResponse(BaseModel):
    scripts: List[ScriptOut]
    groups: Dict[str, List[str]]


class PreferencesResponse(BaseModel):
    script: str
    language: str


class ScriptUpdate(BaseModel):
    script: str


class LanguageUpdate(BaseModel):
    language: str


class PreferenceUpdateResponse(PreferencesResponse):
    updated: bool


class TransliterateRequest(BaseModel):
    text: str
    from_script: str = "devanagari"
    # Defaults to the caller's active script
    to_script: Optional[str] = None
    only_eligible: bool = False


class TransliterateResponse(BaseModel):
    success: bool = True
    text: str
    target_script: str
    changed: bool


class RenderRequest(BaseModel):
    tree: Any = Field(..., description="String leaf or {tag, attributes, children} node, or a list of them")


class RenderResponse(BaseModel):
    success: bool = True
    target_script: str
    tree: Any


class HtmlRenderRequest(BaseModel):
    html: str


class HtmlRenderResponse(BaseModel):
    success: bool = True
    target_script: str
    html: str
    text: str = Field(..., description="Transliterated fragment with markup stripped")
