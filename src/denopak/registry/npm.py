"""npm package-registry fetcher."""

from __future__ import annotations

from denopak.checksum import base64_digest_to_hex, digest_hex, parse_checksum
from denopak.fetch.http import HttpClient
from denopak.lockfile.model import PackageIdentifier
from denopak.models import ArchiveSource, Checksum, FileSource, SourceDescriptor
from denopak.observability import StructuredLogger
from denopak.policy import Policy
from denopak.registry.schema import load_json, parse_npm_packument


class NpmFetcher:
    """Resolve one npm package into its registry document and tarball."""

    registry = "npm"

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

    async def fetch(self, pkg: PackageIdentifier) -> list[SourceDescriptor]:
        meta_url = f"{self.policy.npm_url}/{pkg.module}"
        dest = f"{self.policy.deno_dir}/npm/{self.policy.npm_host}/{pkg.module}"

        meta_text = await self.http.get_text(meta_url)
        self.logger.log(
            operation="fetch",
            registry=self.registry,
            module=pkg.module,
            version=pkg.version,
            message=f"GET {meta_url}",
            level="debug",
        )
        meta = FileSource(
            url=meta_url,
            checksum=Checksum("sha256", digest_hex(meta_text)),
            dest=dest,
            dest_filename="registry.json",
        )

        packument = parse_npm_packument(load_json(meta_text, url=meta_url), module=pkg.module)
        record = packument.version(pkg.version)
        integrity = parse_checksum(
            record.integrity,
            field=f"versions.{pkg.version}.dist.integrity",
        )
        archive = ArchiveSource(
            url=f"{meta_url}/-/{pkg.name}-{pkg.version}.tgz",
            checksum=Checksum(integrity.algorithm, base64_digest_to_hex(integrity.value)),
            dest=f"{dest}/{pkg.version}",
            only_arches=(pkg.architecture,) if pkg.architecture else (),
        )

        self.logger.log(
            operation="expand",
            registry=self.registry,
            module=pkg.module,
            version=pkg.version,
            message="Resolved 2 sources.",
            extra={"architecture": pkg.architecture},
        )
        return [meta, archive]
