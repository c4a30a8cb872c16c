"""Remote template download and extraction."""

from __future__ import annotations

import logging
import os
import shutil
import ssl
import tarfile
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Protocol

import httpx
import truststore

from greycode_cli.core.errors import TemplateFetchError

__all__ = [
    "TemplateSource",
    "FetchResult",
    "TemplateFetcher",
    "GitHubTarballFetcher",
    "build_http_client",
    "github_auth_headers",
    "parse_template_source",
]

logger = logging.getLogger(__name__)

GITHUB_ARCHIVE_URL = "https://github.com/{owner}/{repo}/archive/{ref}.tar.gz"
DOWNLOAD_TIMEOUT = 60
CHUNK_SIZE = 8192


@dataclass(frozen=True)
class TemplateSource:
    owner: str
    repo: str
    ref: str = "HEAD"

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}"

    @property
    def archive_url(self) -> str:
        return GITHUB_ARCHIVE_URL.format(owner=self.owner, repo=self.repo, ref=self.ref)

    def __str__(self) -> str:
        return self.slug if self.ref == "HEAD" else f"{self.slug}#{self.ref}"


@dataclass(frozen=True)
class FetchResult:
    source: TemplateSource
    destination: Path
    files: int


class TemplateFetcher(Protocol):
    """Copies a template tree into a destination directory."""

    def fetch(self, source: TemplateSource, destination: Path) -> FetchResult: ...


def parse_template_source(value: str) -> TemplateSource:
    """Parse ``owner/repo`` or ``owner/repo#ref`` (``github:`` prefix allowed)."""
    text = value.strip()
    if text.startswith("github:"):
        text = text[len("github:"):]
    slug, _, ref = text.partition("#")
    parts = slug.strip("/").split("/")
    if len(parts) != 2 or not all(part.strip() for part in parts):
        raise ValueError(f"Invalid template source '{value}'. Expected format owner/repo[#ref]")
    return TemplateSource(owner=parts[0].strip(), repo=parts[1].strip(), ref=ref.strip() or "HEAD")


def _github_token(cli_token: str | None = None) -> str | None:
    """Return sanitized GitHub token (cli arg takes precedence) or None."""
    return ((cli_token or os.getenv("GH_TOKEN") or os.getenv("GITHUB_TOKEN") or "").strip()) or None


def github_auth_headers(cli_token: str | None = None) -> dict[str, str]:
    """Return Authorization header dict only when a non-empty token exists."""
    token = _github_token(cli_token)
    return {"Authorization": f"Bearer {token}"} if token else {}


def build_http_client(skip_tls: bool = False) -> httpx.Client:
    """Create an httpx client backed by the system trust store."""
    verify: ssl.SSLContext | bool = False if skip_tls else truststore.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    return httpx.Client(verify=verify)


def _copy_tree(source_dir: Path, destination: Path) -> int:
    """Copy ``source_dir`` contents over ``destination``, overwriting files."""
    copied = 0
    for item in source_dir.rglob("*"):
        rel_path = item.relative_to(source_dir)
        target = destination / rel_path
        if item.is_dir() and not item.is_symlink():
            target.mkdir(parents=True, exist_ok=True)
            continue
        target.parent.mkdir(parents=True, exist_ok=True)
        if target.is_dir() and not target.is_symlink():
            shutil.rmtree(target)
        elif target.exists() or target.is_symlink():
            target.unlink()
        shutil.copy2(item, target, follow_symlinks=False)
        copied += 1
    return copied


class GitHubTarballFetcher:
    """Fetch a repository snapshot from GitHub as a tarball.

    Every fetch downloads a fresh archive; nothing is cached between runs.
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        *,
        github_token: str | None = None,
        on_progress: Callable[[int, int], None] | None = None,
    ):
        self.client = client if client is not None else build_http_client()
        self.github_token = github_token
        self.on_progress = on_progress

    def _download(self, source: TemplateSource, archive_path: Path) -> None:
        headers = {"Cache-Control": "no-cache", **github_auth_headers(self.github_token)}
        logger.debug("Downloading %s", source.archive_url)
        try:
            with self.client.stream(
                "GET",
                source.archive_url,
                timeout=DOWNLOAD_TIMEOUT,
                follow_redirects=True,
                headers=headers,
            ) as response:
                if response.status_code == 404:
                    raise TemplateFetchError(f"Template repository {source} not found")
                if response.status_code != 200:
                    raise TemplateFetchError(
                        f"Download of {source} failed with HTTP {response.status_code}"
                    )
                total_size = int(response.headers.get("content-length", 0) or 0)
                downloaded = 0
                with open(archive_path, "wb") as f:
                    for chunk in response.iter_bytes(chunk_size=CHUNK_SIZE):
                        f.write(chunk)
                        downloaded += len(chunk)
                        if self.on_progress:
                            self.on_progress(downloaded, total_size)
        except httpx.HTTPError as exc:
            raise TemplateFetchError(f"Error downloading {source}: {exc}") from exc
        except OSError as exc:
            raise TemplateFetchError(f"Cannot save template archive for {source}: {exc}") from exc

    def _extract(self, archive_path: Path, workdir: Path) -> Path:
        extract_root = workdir / "extract"
        extract_root.mkdir()
        try:
            with tarfile.open(archive_path, "r:*") as tar:
                tar.extractall(extract_root, filter="data")
        except (tarfile.TarError, OSError) as exc:
            raise TemplateFetchError(f"Cannot unpack template archive: {exc}") from exc

        # GitHub archives wrap everything in a single <repo>-<ref>/ directory
        extracted_items = list(extract_root.iterdir())
        if len(extracted_items) == 1 and extracted_items[0].is_dir():
            return extracted_items[0]
        return extract_root

    def fetch(self, source: TemplateSource, destination: Path) -> FetchResult:
        with tempfile.TemporaryDirectory(prefix="greycode-") as temp_dir:
            workdir = Path(temp_dir)
            archive_path = workdir / "template.tar.gz"
            self._download(source, archive_path)
            source_dir = self._extract(archive_path, workdir)
            try:
                destination.mkdir(parents=True, exist_ok=True)
                files = _copy_tree(source_dir, destination)
            except OSError as exc:
                raise TemplateFetchError(f"Cannot copy template into {destination}: {exc}") from exc
        logger.debug("Copied %d files from %s into %s", files, source, destination)
        return FetchResult(source=source, destination=destination, files=files)
