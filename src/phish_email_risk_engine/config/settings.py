"""Scoring config loader from yaml + env."""

from __future__ import annotations

from pathlib import Path
import os
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator

PACKAGE_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_CONFIG_PATH = PACKAGE_ROOT / "config" / "defaults.yaml"
ENV_PREFIX = "PHISH_RISK_"


class ScoringWeights(BaseModel):
    model_config = ConfigDict(frozen=True)

    dmarc_fail: int = Field(default=35, ge=0)
    spf_fail: int = Field(default=15, ge=0)
    dkim_fail: int = Field(default=15, ge=0)
    display_name_spoof: int = Field(default=10, ge=0)
    malformed_domain: int = Field(default=10, ge=0)
    keyword_multiple: int = Field(default=12, ge=0)
    shortened_link: int = Field(default=18, ge=0)
    data_uri: int = Field(default=12, ge=0)
    html_form: int = Field(default=10, ge=0)
    domain_mismatch: int = Field(default=30, ge=0)
    embedded_message: int = Field(default=18, ge=0)
    anchor_mismatch: int = Field(default=16, ge=0)


class RiskThresholds(BaseModel):
    model_config = ConfigDict(frozen=True)

    high: int = Field(default=80, ge=0, le=100)
    medium: int = Field(default=40, ge=0, le=100)

    @model_validator(mode="after")
    def _check_order(self) -> "RiskThresholds":
        if self.medium > self.high:
            raise ValueError("medium threshold must not exceed high threshold")
        return self


class ScoringConfig(BaseModel):
    """Immutable tuning tables shared read-only across analyses."""

    model_config = ConfigDict(frozen=True)

    profile: str = Field(default="default")
    weights: ScoringWeights = Field(default_factory=ScoringWeights)
    thresholds: RiskThresholds = Field(default_factory=RiskThresholds)
    forwarded_mismatch_factor: float = Field(default=0.6, ge=0.0, le=1.0)
    redirector_factor: float = Field(default=0.7, ge=0.0)
    keyword_min_hits: int = Field(default=2, ge=1)
    use_public_suffix_list: bool = Field(default=True)
    anchor_base_url: str = Field(default="https://localhost/")
    shortener_domains: frozenset[str] = Field(
        default=frozenset(
            {"bit.ly", "tinyurl.com", "t.co", "ow.ly", "buff.ly", "rb.gy", "is.gd", "t.ly", "cutt.ly", "rebrand.ly"}
        )
    )
    redirector_hosts: frozenset[str] = Field(
        default=frozenset(
            {
                "nam01.safelinks.protection.outlook.com",
                "safelinks.protection.outlook.com",
                "urldefense.proofpoint.com",
                "urldefense.sharepoint.com",
                "www.google.com",
            }
        )
    )
    redirector_params: tuple[str, ...] = Field(default=("url", "u", "target", "q", "r"))
    suspicious_keywords: tuple[str, ...] = Field(
        default=(
            "urgent",
            "verify",
            "password",
            "invoice",
            "gift card",
            "wire",
            "overdue",
            "2fa",
            "reset",
            "confirm",
            "pay now",
        )
    )
    embedded_message_types: frozenset[str] = Field(default=frozenset({"item", "message/rfc822"}))

    @model_validator(mode="before")
    @classmethod
    def _lowercase_tables(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        cleaned = dict(data)
        for key in ("shortener_domains", "redirector_hosts", "suspicious_keywords", "embedded_message_types"):
            values = cleaned.get(key)
            if isinstance(values, (list, tuple, set, frozenset)):
                items = [str(item).strip().lower() for item in values if str(item).strip()]
                cleaned[key] = list(dict.fromkeys(items))
        return cleaned

    @property
    def redirector_link_penalty(self) -> int:
        return int(self.weights.shortened_link * self.redirector_factor + 0.5)


DEFAULT_SCORING_CONFIG = ScoringConfig()


def load_yaml(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    if not p.exists():
        return {}
    payload = yaml.safe_load(p.read_text(encoding="utf-8"))
    return payload if isinstance(payload, dict) else {}


def _pick_env(name: str, fallback: Any) -> Any:
    value = os.getenv(ENV_PREFIX + name)
    return value if value not in (None, "") else fallback


def _parse_int(raw: Any, fallback: int) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError):
        return fallback


def _parse_float(raw: Any, fallback: float) -> float:
    try:
        return float(raw)
    except (TypeError, ValueError):
        return fallback


def _parse_bool(raw: Any, fallback: bool) -> bool:
    if isinstance(raw, bool):
        return raw
    if raw is None:
        return fallback
    value = str(raw).strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return fallback


def _merge_profile(base: dict[str, Any], profile: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in profile.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = {**current, **value}
        else:
            merged[key] = value
    return merged


def _resolve_default_config_path(path: str | Path | None) -> Path:
    if path is not None:
        return Path(path)
    env_default_path = os.getenv(ENV_PREFIX + "DEFAULT_CONFIG_PATH")
    if env_default_path:
        return Path(env_default_path)
    return DEFAULT_CONFIG_PATH


def load_config(
    path: str | Path | None = None,
    *,
    profile_override: str | None = None,
) -> tuple[ScoringConfig, dict[str, Any]]:
    default_path = _resolve_default_config_path(path)
    merged = load_yaml(default_path)
    profiles = merged.get("profiles")
    profile_map = profiles if isinstance(profiles, dict) else {}

    active_profile = str(profile_override or _pick_env("PROFILE", merged.get("profile", "default")))
    selected_profile = profile_map.get(active_profile, {})
    selected = selected_profile if isinstance(selected_profile, dict) else {}

    base = {key: value for key, value in merged.items() if key not in {"profiles", "profile"}}
    payload = _merge_profile(base, selected)

    thresholds = dict(payload.get("thresholds") or {})
    thresholds["high"] = _parse_int(
        _pick_env("HIGH_THRESHOLD", thresholds.get("high", 80)),
        _parse_int(thresholds.get("high"), 80),
    )
    thresholds["medium"] = _parse_int(
        _pick_env("MEDIUM_THRESHOLD", thresholds.get("medium", 40)),
        _parse_int(thresholds.get("medium"), 40),
    )
    payload["thresholds"] = thresholds

    payload["forwarded_mismatch_factor"] = _parse_float(
        _pick_env("FORWARDED_MISMATCH_FACTOR", payload.get("forwarded_mismatch_factor", 0.6)),
        _parse_float(payload.get("forwarded_mismatch_factor"), 0.6),
    )
    payload["redirector_factor"] = _parse_float(
        _pick_env("REDIRECTOR_FACTOR", payload.get("redirector_factor", 0.7)),
        _parse_float(payload.get("redirector_factor"), 0.7),
    )
    payload["keyword_min_hits"] = _parse_int(
        _pick_env("KEYWORD_MIN_HITS", payload.get("keyword_min_hits", 2)),
        _parse_int(payload.get("keyword_min_hits"), 2),
    )
    payload["use_public_suffix_list"] = _parse_bool(
        _pick_env("USE_PUBLIC_SUFFIX_LIST", payload.get("use_public_suffix_list", True)),
        _parse_bool(payload.get("use_public_suffix_list"), True),
    )
    payload["profile"] = active_profile

    cfg = ScoringConfig.model_validate(payload)
    return cfg, merged
