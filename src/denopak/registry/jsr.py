"""JSR module-registry fetcher."""

from __future__ import annotations

from denopak.checksum import digest_hex, parse_checksum
from denopak.fetch.http import HttpClient
from denopak.lockfile.model import PackageIdentifier
from denopak.models import Checksum, FileSource
from denopak.observability import StructuredLogger
from denopak.policy import Policy
from denopak.registry.schema import load_json, parse_jsr_version_meta


class JsrFetcher:
    """Expand one JSR package into its metadata files and every module file it ships."""

    registry = "jsr"

    def __init__(
        self,
        http: HttpClient,
        *,
        policy: Policy | None = None,
        logger: StructuredLogger | None = None,
    ) -> None:
        self.http = http
        self.policy = policy or Policy()
        self.logger = logger or StructuredLogger()

    async def fetch(self, pkg: PackageIdentifier) -> list[FileSource]:
        base = f"{self.policy.jsr_url}/{pkg.module}"
        dest = f"{self.policy.vendor_dir}/{self.policy.jsr_host}/{pkg.module}"

        meta_url = f"{base}/meta.json"
        meta_text = await self._get(pkg, meta_url)
        sources = [
            FileSource(
                url=meta_url,
                checksum=Checksum("sha256", digest_hex(meta_text)),
                dest=dest,
                dest_filename="meta.json",
            )
        ]

        version_meta_url = f"{base}/{pkg.version}_meta.json"
        version_meta_text = await self._get(pkg, version_meta_url)
        sources.append(
            FileSource(
                url=version_meta_url,
                checksum=Checksum("sha256", digest_hex(version_meta_text)),
                dest=dest,
                dest_filename=f"{pkg.version}_meta.json",
            )
        )

        version_meta = parse_jsr_version_meta(
            load_json(version_meta_text, url=version_meta_url),
            module=pkg.module,
        )
        skipped = 0
        for path in version_meta.module_graph:
            encoded = version_meta.manifest.get(path)
            # graph nodes without a manifest entry are not downloadable files
            if encoded is None:
                skipped += 1
                continue
            directory, _, filename = path.rpartition("/")
            sources.append(
                FileSource(
                    url=f"{base}/{pkg.version}{path}",
                    checksum=parse_checksum(encoded, field=f"manifest.{path}.checksum"),
                    dest=f"{dest}/{pkg.version}{directory}",
                    dest_filename=filename,
                )
            )

        self.logger.log(
            operation="expand",
            registry=self.registry,
            module=pkg.module,
            version=pkg.version,
            message=f"Resolved {len(sources)} sources.",
            extra={"skipped_graph_nodes": skipped},
        )
        return sources

    async def _get(self, pkg: PackageIdentifier, url: str) -> str:
        text = await self.http.get_text(url)
        self.logger.log(
            operation="fetch",
            registry=self.registry,
            module=pkg.module,
            version=pkg.version,
            message=f"GET {url}",
            level="debug",
        )
        return text
