"""Template fetching for greycodejs projects."""

from .fetcher import (
    FetchResult,
    GitHubTarballFetcher,
    TemplateFetcher,
    TemplateSource,
    build_http_client,
    github_auth_headers,
    parse_template_source,
)

__all__ = [
    "FetchResult",
    "GitHubTarballFetcher",
    "TemplateFetcher",
    "TemplateSource",
    "build_http_client",
    "github_auth_headers",
    "parse_template_source",
]
