"""
Runtime settings for todolist-service.

Read from ``TODOLIST_*`` variables (process environment, then ``.env`` or
``settings.ini``); every field has a development default so the app
starts without configuration.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from decouple import Config, Csv, RepositoryEmpty, config as auto_config

DEV_SECRET = "todolist-dev-secret-change-me-in-production"


class MappingRepository(RepositoryEmpty):
    """decouple repository over an explicit mapping."""

    def __init__(self, data: Mapping[str, str]):
        self.data = dict(data)

    def __contains__(self, key):
        return key in self.data

    def __getitem__(self, key):
        return self.data[key]


@dataclass
class Settings:
    jwt_secret: str = DEV_SECRET
    jwt_algorithms: tuple[str, ...] = ("HS256",)
    jwt_audience: str | None = None
    jwt_issuer: str | None = None
    policy_file: str | None = None
    seed_sample_data: bool = True
    strict_ownership: bool = False
    decision_log_size: int = 1000
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        config = auto_config if environ is None else Config(MappingRepository(environ))
        algorithms = config("TODOLIST_JWT_ALGORITHMS", default="HS256", cast=Csv(post_process=tuple))
        return cls(
            jwt_secret=config("TODOLIST_JWT_SECRET", default=DEV_SECRET),
            jwt_algorithms=algorithms or ("HS256",),
            jwt_audience=config("TODOLIST_JWT_AUDIENCE", default="") or None,
            jwt_issuer=config("TODOLIST_JWT_ISSUER", default="") or None,
            policy_file=config("TODOLIST_POLICY_FILE", default="") or None,
            seed_sample_data=config("TODOLIST_SEED_SAMPLE_DATA", default=True, cast=bool),
            strict_ownership=config("TODOLIST_STRICT_OWNERSHIP", default=False, cast=bool),
            decision_log_size=config("TODOLIST_DECISION_LOG_SIZE", default=1000, cast=int),
            log_level=config("TODOLIST_LOG_LEVEL", default="INFO").upper(),
        )
