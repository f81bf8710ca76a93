"""Configuration models for the SCM provider generator."""

from typing import Any, ClassVar, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServiceConfig(BaseSettings):
    """Service configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Ignore extra environment variables
        populate_by_name=True,  # Allow both field names and validation aliases
    )

    environment: Literal["development", "production"] = Field(
        default="development",
        description="The environment the service is running in",
        validation_alias="ENVIRONMENT",
    )
    project_id: str = Field(
        default="",
        description="GCP project ID holding the Secret Manager secrets",
        validation_alias="PROJECT_ID",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        description="Timeout applied to every SCM provider HTTP request",
        validation_alias="HTTP_TIMEOUT_SECONDS",
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production" and bool(self.project_id)


class CamelModel(BaseModel):
    """Accepts both the camelCase keys of the declarative config and snake_case names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


class SecretRef(CamelModel):
    """A key inside a named secret, resolved against the parent resource's namespace."""

    secret_name: str
    key: str


class BasicAuth(CamelModel):
    username: str
    password_ref: SecretRef


class GithubConfig(CamelModel):
    kind: ClassVar[str] = "Github"

    organization: str
    api: Optional[str] = Field(default=None, description="GitHub Enterprise API URL")
    token_ref: Optional[SecretRef] = None
    all_branches: bool = False


class GitlabConfig(CamelModel):
    kind: ClassVar[str] = "Gitlab"

    group: str
    api: Optional[str] = None
    token_ref: Optional[SecretRef] = None
    all_branches: bool = False
    include_subgroups: bool = False


class GiteaConfig(CamelModel):
    kind: ClassVar[str] = "Gitea"

    owner: str
    api: str = "https://gitea.com"
    token_ref: Optional[SecretRef] = None
    all_branches: bool = False
    insecure: bool = Field(default=False, description="Skip TLS certificate verification")


class BitbucketServerConfig(CamelModel):
    kind: ClassVar[str] = "Bitbucket Server"

    project: str
    api: str
    basic_auth: Optional[BasicAuth] = Field(default=None, description="Anonymous access when absent")
    all_branches: bool = False


class AzureDevOpsConfig(CamelModel):
    kind: ClassVar[str] = "Azure DevOps"

    organization: str
    team_project: str
    api: str = "https://dev.azure.com"
    access_token_ref: SecretRef
    all_branches: bool = False


ProviderConfig = Union[GithubConfig, GitlabConfig, GiteaConfig, BitbucketServerConfig, AzureDevOpsConfig]

# Priority order in which provider sections are considered.
PROVIDER_FIELDS = ("github", "gitlab", "gitea", "bitbucket_server", "azure_devops")


class SCMProviderFilter(CamelModel):
    """All criteria set on one filter must match; any one filter in a list may match."""

    repository_match: Optional[str] = None
    paths_exist: Optional[list[str]] = None
    paths_do_not_exist: Optional[list[str]] = None
    label_match: Optional[str] = None
    branch_match: Optional[str] = None


class SCMProviderGeneratorConfig(CamelModel):
    github: Optional[GithubConfig] = None
    gitlab: Optional[GitlabConfig] = None
    gitea: Optional[GiteaConfig] = None
    bitbucket_server: Optional[BitbucketServerConfig] = None
    # to_camel would yield "azureDevops".
    azure_devops: Optional[AzureDevOpsConfig] = Field(default=None, alias="azureDevOps")

    filters: list[SCMProviderFilter] = Field(default_factory=list)
    clone_protocol: Optional[str] = Field(default=None, description="'ssh' or 'https'; provider default when unset")
    requeue_after_seconds: Optional[int] = None
    template: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _single_provider(self) -> "SCMProviderGeneratorConfig":
        populated = [name for name in PROVIDER_FIELDS if getattr(self, name) is not None]
        if len(populated) > 1:
            raise ValueError(f"only one SCM provider may be configured, got: {', '.join(populated)}")
        return self

    @property
    def provider(self) -> Optional[ProviderConfig]:
        """The active provider section, or None when no section is populated."""
        for name in PROVIDER_FIELDS:
            section = getattr(self, name)
            if section is not None:
                return section
        return None


class ApplicationSetGenerator(CamelModel):
    """One generator entry of the owning resource; only the SCM provider kind is handled here."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    scm_provider: Optional[SCMProviderGeneratorConfig] = None


class ParentResource(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    name: str = ""
    namespace: str
