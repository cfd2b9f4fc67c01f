"""Runtime settings: store timeouts, concurrency, fallback chains, lookup collections."""

import os
from pathlib import Path
from typing import Any, Mapping, Optional

try:
    import yaml
except ModuleNotFoundError as e:
    raise ModuleNotFoundError(
        "PyYAML is required for settings loading. Run: pip install PyYAML"
    ) from e
from pydantic import BaseModel, Field, field_validator

from jobboard_core.models.dashboard import QueryCandidate
from jobboard_core.models.entities import CanonicalRole
from jobboard_core.roles.rules import normalize_role_value
from jobboard_core.sources.candidates import ACCOUNT_COLLECTIONS, JOB_COLLECTIONS, default_chains

ENV_PREFIX = "JOBBOARD_"


def _split(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


class CoreSettings(BaseModel):
    """Settings for one dashboard service."""

    store: str = Field(default="memory", description="StoreRegistry name: memory | rest")
    store_url: Optional[str] = None
    store_token: Optional[str] = None
    store_timeout_seconds: float = Field(default=10.0, gt=0)
    enrichment_concurrency: int = Field(default=20, ge=1)
    default_role: CanonicalRole = CanonicalRole.JOB_SEEKER
    account_collections: list[str] = Field(default_factory=lambda: list(ACCOUNT_COLLECTIONS))
    job_collections: list[str] = Field(default_factory=lambda: list(JOB_COLLECTIONS))
    # role -> entity set -> candidates; replaces the built-in chain for that set
    chains: dict[CanonicalRole, dict[str, list[QueryCandidate]]] = Field(default_factory=dict)

    @field_validator("default_role", mode="before")
    @classmethod
    def _coerce_role(cls, value: Any) -> Any:
        if isinstance(value, str):
            return normalize_role_value(value) or value
        return value

    @field_validator("chains", mode="before")
    @classmethod
    def _coerce_chain_roles(cls, value: Any) -> Any:
        if not isinstance(value, Mapping):
            return value
        return {normalize_role_value(k) or k: v for k, v in value.items()}

    def chains_for(self, role: CanonicalRole) -> dict[str, list[QueryCandidate]]:
        """Built-in chains for role with any configured overrides applied."""
        chains = default_chains(role)
        for entity_set, candidates in self.chains.get(role, {}).items():
            chains[entity_set] = [c.model_copy(deep=True) for c in candidates]
        return chains

    @classmethod
    def from_yaml(cls, path: str | Path) -> "CoreSettings":
        """
        Load settings from YAML. Supports nested (store/timeouts/concurrency/collections)
        or flat structure.
        """
        data = yaml.safe_load(Path(path).read_text()) or {}
        store = data.get("store") if isinstance(data.get("store"), dict) else {}
        timeouts = data.get("timeouts", {})
        concurrency = data.get("concurrency", {})
        collections = data.get("collections", {})

        def _get(key: str, nested: dict, top: dict, default=None):
            return nested.get(key, top.get(key, default))

        flat: dict[str, Any] = {}
        kind = store.get("kind") if store else data.get("store")
        if kind:
            flat["store"] = kind
        for field, key in (("store_url", "url"), ("store_token", "token")):
            value = store.get(key) if store else data.get(field)
            if value:
                flat[field] = value
        timeout = _get("store_seconds", timeouts, {}) or data.get("store_timeout_seconds")
        if timeout is not None:
            flat["store_timeout_seconds"] = timeout
        enrichment = _get("enrichment", concurrency, {}) or data.get("enrichment_concurrency")
        if enrichment is not None:
            flat["enrichment_concurrency"] = enrichment
        accounts = _get("accounts", collections, {}) or data.get("account_collections")
        if accounts:
            flat["account_collections"] = accounts
        jobs = _get("jobs", collections, {}) or data.get("job_collections")
        if jobs:
            flat["job_collections"] = jobs
        if data.get("default_role"):
            flat["default_role"] = data["default_role"]
        if data.get("chains"):
            flat["chains"] = data["chains"]
        return cls.model_validate(flat)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CoreSettings":
        """Settings from JOBBOARD_* environment variables; unset variables keep defaults."""
        env = os.environ if environ is None else environ
        flat: dict[str, Any] = {}
        scalars = {
            "STORE": "store",
            "STORE_URL": "store_url",
            "STORE_TOKEN": "store_token",
            "STORE_TIMEOUT": "store_timeout_seconds",
            "ENRICHMENT_CONCURRENCY": "enrichment_concurrency",
            "DEFAULT_ROLE": "default_role",
        }
        for suffix, field in scalars.items():
            value = env.get(ENV_PREFIX + suffix)
            if value:
                flat[field] = value
        for suffix, field in (("ACCOUNT_COLLECTIONS", "account_collections"), ("JOB_COLLECTIONS", "job_collections")):
            value = env.get(ENV_PREFIX + suffix)
            if value:
                flat[field] = _split(value)
        return cls.model_validate(flat)
