import logging
from typing import List

from fastapi import APIRouter, HTTPException, Request, Response
from lipi.api.schemas import (
    HtmlRenderRequest,
    HtmlRenderResponse,
    LanguageOut,
    LanguageUpdate,
    PreferencesResponse,
    PreferenceUpdateResponse,
    RenderRequest,
    RenderResponse,
    ScriptOut,
    ScriptsResponse,
    ScriptUpdate,
    TransliterateRequest,
    TransliterateResponse,
)
from lipi.core.config import settings
from lipi.core.detection import devanagari_ratio, is_eligible
from lipi.core.schemes import SCRIPT_DEFINITIONS, SUPPORTED_LANGUAGES, get_script, scripts_by_group
from lipi.render.html import parse_html, render_html, strip_html
from lipi.render.tree import iter_leaves, transliterate_tree, tree_from_data, tree_to_data
from lipi.services.transliteration import build_engine
from lipi.state.preferences import PreferenceSession, SessionRegistry
from lipi.state.storage import build_storage

router = APIRouter()
engine = build_engine()
sessions = SessionRegistry(
    build_storage(settings.PREFERENCES_PATH),
    engine,
    default_script=settings.DEFAULT_SCRIPT,
    default_lang=settings.DEFAULT_LANG,
)


def _session(request: Request) -> PreferenceSession:
    client_id = getattr(request.state, "client_id", None) or "anonymous"
    return sessions.get(client_id)


def _check_length(text: str) -> None:
    if len(text) > settings.MAX_TEXT_LEN:
        raise HTTPException(status_code=413, detail=f"text longer than {settings.MAX_TEXT_LEN} characters")


@router.get("/health")
async def health():
    cache_stats = engine.cache.stats() if engine.cache else {"size": 0, "hits": 0, "misses": 0}
    return {
        "ok": True,
        "backend": engine.backend,
        "sessions": len(sessions),
        "cache_size": cache_stats["size"],
        "cache_hits": cache_stats["hits"],
        "cache_misses": cache_stats["misses"],
    }


@router.get("/scripts", response_model=ScriptsResponse)
async def list_scripts():
    scripts = [ScriptOut(key=s.key, scheme=s.scheme, label=s.label, group=s.group) for s in SCRIPT_DEFINITIONS.values()]
    groups = {name: [s.key for s in members] for name, members in scripts_by_group().items()}
    return ScriptsResponse(scripts=scripts, groups=groups)


@router.get("/languages", response_model=List[LanguageOut])
async def list_languages():
    return [LanguageOut(code=lang.code, name=lang.name) for lang in SUPPORTED_LANGUAGES]


@router.get("/preferences", response_model=PreferencesResponse)
async def get_preferences(request: Request):
    return PreferencesResponse(**_session(request).snapshot())


@router.put("/preferences/script", response_model=PreferenceUpdateResponse)
async def set_script(req: ScriptUpdate, request: Request):
    session = _session(request)
    updated = session.script.set_target_script(req.script)
    return PreferenceUpdateResponse(updated=updated, **session.snapshot())


@router.put("/preferences/language", response_model=PreferenceUpdateResponse)
async def set_language(req: LanguageUpdate, request: Request):
    session = _session(request)
    updated = session.language.set_target_lang(req.language)
    return PreferenceUpdateResponse(updated=updated, **session.snapshot())


@router.post("/transliterate", response_model=TransliterateResponse)
async def transliterate(req: TransliterateRequest, request: Request, response: Response):
    _check_length(req.text)
    rid = getattr(request.state, "request_id", "n/a")
    session = _session(request)
    target = req.to_script or session.script.target_script
    target_def = get_script(target)
    target_key = target_def.key if target_def else "DEVANAGARI"

    if req.only_eligible and not is_eligible(req.text):
        output = req.text
    elif req.to_script is None:
        output = session.script.transliterate(req.text, req.from_script)
    else:
        output = engine.transliterate(req.text, req.from_script, req.to_script)

    logging.info(
        "transliterate request_id=%s from=%s to=%s len=%d deva_ratio=%.2f changed=%s",
        rid,
        req.from_script,
        target_key,
        len(req.text),
        devanagari_ratio(req.text),
        output != req.text,
    )
    response.headers["X-Transliteration-Backend"] = engine.backend
    return TransliterateResponse(text=output, target_script=target_key, changed=output != req.text)


@router.post("/render", response_model=RenderResponse)
async def render(req: RenderRequest, request: Request):
    session = _session(request)
    try:
        if isinstance(req.tree, list):
            forest = [tree_from_data(item) for item in req.tree]
        else:
            forest = tree_from_data(req.tree)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    converted = transliterate_tree(forest, session.script)
    changed = sum(
        1 for before, after in zip(iter_leaves(forest), iter_leaves(converted)) if before.text != after.text
    )
    logging.info(
        "render request_id=%s script=%s leaves_changed=%d",
        getattr(request.state, "request_id", "n/a"),
        session.script.target_script,
        changed,
    )
    if isinstance(converted, list):
        data = [tree_to_data(t) for t in converted]
    else:
        data = tree_to_data(converted)
    return RenderResponse(target_script=session.script.target_script, tree=data)


@router.post("/render/html", response_model=HtmlRenderResponse)
async def render_fragment(req: HtmlRenderRequest, request: Request):
    _check_length(req.html)
    session = _session(request)
    converted = render_html(transliterate_tree(parse_html(req.html), session.script))
    return HtmlRenderResponse(
        target_script=session.script.target_script,
        html=converted,
        text=strip_html(converted),
    )
