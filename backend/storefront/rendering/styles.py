"""
Three-tier style precedence.

    System defaults < global site styles < template overrides

Templates ship with baseline values (the default body font for example).
An override equal to the system default is therefore not an explicit
choice and must not clobber the administrator's global setting.
"""
from typing import Any, Dict, Mapping, Optional

SYSTEM_STYLE_DEFAULTS: Dict[str, str] = {
    "primary_color": "#2563eb",
    "secondary_color": "#64748b",
    "body_font": "system-ui, -apple-system, sans-serif",
    "google_font_body": "Inter",
    "google_font_heading": "",
    "body_size": "16px",
    "body_color": "#1e293b",
    "h1_color": "#0f172a",
    "h1_size": "2.5rem",
    "h1_weight": "700",
    "container_width": "1200px",
    "link_color": "#2563eb",
}


def _explicit_overrides(overrides: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        key: value
        for key, value in overrides.items()
        if value is not None and not (key in SYSTEM_STYLE_DEFAULTS and value == SYSTEM_STYLE_DEFAULTS[key])
    }


def resolve_styles(
    global_styles: Optional[Mapping[str, Any]] = None,
    template_overrides: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    merged: Dict[str, Any] = dict(SYSTEM_STYLE_DEFAULTS)
    merged.update({k: v for k, v in (global_styles or {}).items() if v is not None})
    merged.update(_explicit_overrides(template_overrides or {}))

    if not merged.get("google_font_heading"):
        merged["google_font_heading"] = merged.get("google_font_body", "")

    return merged
