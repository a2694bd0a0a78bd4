# (c) Nelen & Schuurmans

import logging
import os
from collections.abc import Mapping
from typing import Any

from pydantic import Field

from .api_client import ApiProvider
from .base.domain import ConfigurationError
from .base.domain import Dialect
from .base.domain import ValueObject
from .repositories import DependencyRepository
from .repositories import IssueRepository
from .repositories import ProjectRepository
from .repositories import RevisionRepository

__all__ = ["FossaConfig", "FossaClient", "DEFAULT_API_URL"]

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://app.fossa.com/api/"


def parse_dialect(setting: str, value: str) -> Dialect:
    try:
        return Dialect(value.strip().lower())
    except ValueError:
        choices = ", ".join(x.value for x in Dialect)
        raise ConfigurationError(setting, f"must be one of: {choices}")


class FossaConfig(ValueObject):
    api_key: str = Field(repr=False)
    api_url: str = DEFAULT_API_URL
    retries: int = Field(3, ge=0)
    backoff_factor: float = 1.0
    timeout: float = Field(30.0, gt=0)
    issue_dialect: Dialect = Dialect.UNCOUNTED
    revision_dialect: Dialect = Dialect.GROUPED

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "FossaConfig":
        """Read the configuration from FOSSA_* environment variables.

        FOSSA_API_KEY is required. FOSSA_API_URL, FOSSA_ISSUE_DIALECT and
        FOSSA_REVISION_DIALECT are optional.
        """
        if environ is None:
            environ = os.environ
        api_key = environ.get("FOSSA_API_KEY")
        if not api_key:
            raise ConfigurationError("FOSSA_API_KEY")
        values: dict[str, Any] = {"api_key": api_key}
        if environ.get("FOSSA_API_URL"):
            values["api_url"] = environ["FOSSA_API_URL"]
        for setting, field in (
            ("FOSSA_ISSUE_DIALECT", "issue_dialect"),
            ("FOSSA_REVISION_DIALECT", "revision_dialect"),
        ):
            if environ.get(setting):
                values[field] = parse_dialect(setting, environ[setting])
        return cls(**values)


class FossaClient:
    """Entry point to the API: one repository per kind of resource.

    Use as an async context manager so that the HTTP session is opened and
    closed::

        async with FossaClient.from_env() as client:
            projects = await client.projects.list_all(ProjectListQuery())
    """

    def __init__(self, config: FossaConfig):
        self.config = config
        self.provider = ApiProvider(
            url=config.api_url,
            headers_factory=self._headers,
            retries=config.retries,
            backoff_factor=config.backoff_factor,
            timeout=config.timeout,
        )
        self.projects = ProjectRepository(self.provider)
        self.revisions = RevisionRepository(
            self.provider, dialect=config.revision_dialect
        )
        self.dependencies = DependencyRepository(self.provider)
        self.issues = IssueRepository(self.provider, dialect=config.issue_dialect)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "FossaClient":
        return cls(FossaConfig.from_env(environ))

    async def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.api_key}",
            "Accept": "application/json",
        }

    async def connect(self) -> None:
        logger.debug("connecting to %s", self.config.api_url)
        await self.provider.connect()

    async def disconnect(self) -> None:
        await self.provider.disconnect()

    async def __aenter__(self) -> "FossaClient":
        await self.connect()
        return self

    async def __aexit__(self, *args) -> None:
        await self.disconnect()
