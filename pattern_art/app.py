from __future__ import annotations

import hashlib
import logging
import math
from dataclasses import asdict, fields
from typing import Mapping, Optional, Tuple
from urllib.parse import urlsplit

from flask import Flask, jsonify, request

from .config import RESAMPLE_FILTERS, SETTINGS, RenderSettings, configure_logging
from .errors import RenderSurfaceUnavailable, SourceUnavailable, UnsupportedSourceFormat
from .infrastructure.cache import CACHE, last_good_png, next_ticket, remember_last_good
from .infrastructure.decoding import decode_source
from .infrastructure.network import FETCHER
from .infrastructure.responses import download_name, encode_png, png_response, send_png
from .models import (
    PRESETS,
    Adjustments,
    ColorPair,
    PatternOptions,
    PatternType,
    Side,
    parse_color,
    preset,
)
from .processing.patterns import generate_tile
from .processing.pipeline import RenderRequest, render_layers

APP_VERSION = "1.0.0"

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}


def _number(values: Mapping[str, str], name: str, default, cast):
    raw = values.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = float(raw)
    except (TypeError, ValueError):
        value = math.nan
    if not math.isfinite(value):
        raise ValueError(f"{name}: expected a number, got {raw!r}")
    return cast(value)


def _choice(values: Mapping[str, str], name: str, enum, default):
    raw = values.get(name)
    if not raw:
        return default
    try:
        return enum(raw.lower())
    except ValueError:
        options = ", ".join(member.value for member in enum)
        raise ValueError(f"{name}: expected one of {options}, got {raw!r}") from None


def _color(values: Mapping[str, str], name: str, default):
    raw = values.get(name)
    if not raw:
        return default
    try:
        return parse_color(raw)
    except ValueError:
        raise ValueError(f"{name}: unknown color {raw!r}") from None


def parse_render_request(values: Mapping[str, str], settings: RenderSettings = SETTINGS) -> RenderRequest:
    """Build a :class:`RenderRequest` from form or query fields.

    Missing fields fall back to ``settings`` (or the named ``preset``).
    Out-of-range numbers are accepted and clamped later by the pipeline.
    """

    base = settings.default_adjustments()
    preset_name = values.get("preset")
    if preset_name:
        try:
            base = preset(preset_name)
        except KeyError:
            raise ValueError(f"preset: unknown preset {preset_name!r}") from None

    adjustments = Adjustments(
        brightness=_number(values, "brightness", base.brightness, int),
        contrast=_number(values, "contrast", base.contrast, int),
        threshold=_number(values, "threshold", base.threshold, int),
    )
    defaults = settings.default_pattern_options()
    options = PatternOptions(
        scale=_number(values, "scale", defaults.scale, float),
        stroke=_number(values, "stroke", defaults.stroke, float),
        rotation=_number(values, "rotation", defaults.rotation, float),
    )
    colors = settings.default_colors()
    return RenderRequest(
        adjustments=adjustments,
        options=options,
        pattern_type=_choice(values, "pattern", PatternType, settings.default_pattern_type()),
        side=_choice(values, "side", Side, settings.default_side()),
        colors=ColorPair(
            pattern_color=_color(values, "pattern_color", colors.pattern_color),
            background_color=_color(values, "background_color", colors.background_color),
        ),
        invert=(values.get("invert") or "").lower() in _TRUTHY,
    )


def read_source() -> Tuple[bytes, Optional[str]]:
    upload = request.files.get("image")
    if upload is not None and upload.filename:
        return upload.read(), upload.filename
    source_url = request.values.get("source_url")
    if source_url:
        return FETCHER.fetch_bytes(source_url), urlsplit(source_url).path.rsplit("/", 1)[-1]
    raise ValueError("image: upload a file or pass source_url")


def cache_key(
    data: bytes,
    render_request: RenderRequest,
    variant: str,
    settings: RenderSettings = SETTINGS,
) -> str:
    digest = hashlib.sha256(data)
    # sizing and resampling come from live settings, not from the request
    fingerprint = (variant, render_request.normalized(), settings.max_size, settings.resample)
    digest.update(repr(fingerprint).encode("utf-8"))
    return digest.hexdigest()


def _validate_setting(name: str, value):
    if name == "pattern_type":
        return PatternType(str(value).lower()).value
    if name == "side":
        return Side(str(value).lower()).value
    if name in ("pattern_color", "background_color"):
        parse_color(str(value))
        return str(value)
    if name == "resample":
        if str(value).lower() not in RESAMPLE_FILTERS:
            raise ValueError(f"Expected one of {', '.join(RESAMPLE_FILTERS)}")
        return str(value).lower()
    if name == "max_size" and value < 1:
        raise ValueError("Expected a positive size")
    return value


def create_app() -> Flask:
    configure_logging()
    app = Flask(__name__)

    def _render(variant: str):
        ticket = next_ticket()
        try:
            data, source_name = read_source()
            render_request = parse_render_request(request.values)
        except ValueError as exc:
            return (f"Bad request: {exc}", 400)
        except SourceUnavailable as exc:
            return (f"Source Error: {exc}", 502)

        filename = download_name(source_name) if variant == "output" else None
        key = cache_key(data, render_request, variant)
        cached = CACHE.get(key)
        if cached:
            if variant == "output":
                remember_last_good(cached, ticket)
            return png_response(cached, filename)

        try:
            result = render_layers(decode_source(data), render_request)
        except UnsupportedSourceFormat as exc:
            return (f"Unsupported image: {exc}", 415)
        except RenderSurfaceUnavailable as exc:
            logger.warning("Render %d aborted: %s", ticket, exc)
            cached = last_good_png() if variant == "output" else None
            if cached:
                return png_response(cached, filename)
            return (f"Render Error: {exc}", 500)

        png = encode_png(result.output if variant == "output" else result.processed)
        CACHE.put(key, png)
        if variant == "output":
            remember_last_good(png, ticket)
        return png_response(png, filename)

    @app.route("/render", methods=["POST"])
    def render_image():
        return _render("output")

    @app.route("/preview", methods=["POST"])
    def preview():
        return _render("processed")

    @app.route("/tile")
    def tile():
        try:
            render_request = parse_render_request(request.args).normalized()
        except ValueError as exc:
            return (f"Bad request: {exc}", 400)
        colors = render_request.colors.resolve(render_request.invert)
        img = generate_tile(render_request.pattern_type, render_request.options, colors.pattern_color)
        if img is None:
            return ("Pattern tile unavailable", 404)
        return send_png(img)

    @app.route("/last")
    def last():
        cached = last_good_png()
        if not cached:
            return ("Nothing rendered yet", 404)
        return png_response(cached)

    @app.route("/presets")
    def presets():
        defaults = SETTINGS
        return jsonify(
            presets={name: asdict(values) for name, values in PRESETS.items()},
            defaults={
                "adjustments": asdict(defaults.default_adjustments()),
                "options": asdict(defaults.default_pattern_options()),
                "pattern": defaults.pattern_type,
                "side": defaults.side,
                "pattern_color": defaults.pattern_color,
                "background_color": defaults.background_color,
            },
        )

    @app.route("/health")
    def health():
        return jsonify(ok=True, version=APP_VERSION, max_size=SETTINGS.max_size)

    @app.route("/settings", methods=["GET", "PATCH"])
    def settings_view():
        if request.method == "GET":
            return jsonify(asdict(SETTINGS))

        payload = request.get_json(silent=True) or {}
        errors: dict[str, str] = {}
        applied: dict[str, object] = {}

        for field in fields(SETTINGS):
            if field.name not in payload:
                continue

            raw_value = payload[field.name]
            try:
                if field.type is int:
                    coerced = int(raw_value)
                elif field.type is float:
                    coerced = float(raw_value)
                else:
                    coerced = str(raw_value)
                coerced = _validate_setting(field.name, coerced)
            except (TypeError, ValueError) as exc:
                errors[field.name] = str(exc) or f"Expected {field.type.__name__}"
                continue

            setattr(SETTINGS, field.name, coerced)
            applied[field.name] = coerced

        status = 400 if errors else 200
        return (
            jsonify(updated=applied, errors=errors, settings=asdict(SETTINGS)),
            status,
        )

    @app.route("/")
    def index():
        return jsonify(
            version=APP_VERSION,
            endpoints={
                "POST /render": "Pattern art PNG from an upload or source_url",
                "POST /preview": "Binarized preview PNG",
                "GET /tile": "Pattern tile PNG",
                "GET /last": "Last good render",
                "GET /presets": "Adjustment presets and defaults",
                "GET /settings": "Current settings",
            },
        )

    return app


# Expose a module-level Flask application for WSGI servers importing ``pattern_art.app:app``.
app = create_app()
application = app
