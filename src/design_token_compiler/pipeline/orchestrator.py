from __future__ import annotations

"""
orchestrator.py
===============

Does: Turn the declarative platform configuration into built files: for each
      platform resolve its sources, run its transform chain, then render each
      declared file (optionally filtered) with the named format.
Returns:
  - load_build_config(path=None) -> BuildConfig
  - build_platform(config, platform, root=..., timestamp=...) -> [RenderedFile]
  - build_all_platforms(config, root=..., only=None) -> [RenderedFile] (written)
Used by: The `design-tokens build` command and embedding scripts.

Every platform resolves its own TokenCollection, so platforms never share
transformed state. Files are written only after every platform rendered.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from types import MappingProxyType
from typing import Any

from design_token_compiler.pipeline.formats.base import DEFAULT_NAMESPACE, DEFAULT_TITLE, generation_timestamp
from design_token_compiler.pipeline.formats.registry import FORMATS, render
from design_token_compiler.pipeline.general.utils.load_config import load_config
from design_token_compiler.pipeline.general.utils.log import debug
from design_token_compiler.pipeline.tokens.model import TokenCollection
from design_token_compiler.pipeline.tokens.resolve import load_and_resolve
from design_token_compiler.pipeline.transforms.registry import FILTERS, TRANSFORMS, apply_transforms

__all__ = [
    "BuildConfigError",
    "BuildError",
    "FileSpec",
    "PlatformSpec",
    "BuildConfig",
    "RenderedFile",
    "parse_build_config",
    "load_build_config",
    "resolve_platform_tokens",
    "build_platform",
    "render_all_platforms",
    "write_outputs",
    "build_all_platforms",
]

logger = logging.getLogger(__name__)


# ── Exceptions ───────────────────────────────────────────────────────────────
class BuildConfigError(ValueError):
    """Raise when the platform configuration is malformed or names unknown parts."""


class BuildError(RuntimeError):
    """Raise when a platform fails to resolve or render; carries the platform name."""

    def __init__(self, platform: str, cause: BaseException):
        self.platform = platform
        super().__init__(f"Platform '{platform}' failed: {cause}")


# ── Configuration model ──────────────────────────────────────────────────────
def _frozen(mapping: Any, where: str) -> Mapping[str, Any]:
    if mapping is None:
        mapping = {}
    if not isinstance(mapping, dict):
        raise BuildConfigError(f"{where}: 'options' must be an object")
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class FileSpec:
    destination: str
    format: str
    filter: str | None = None
    options: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class PlatformSpec:
    name: str
    transforms: tuple[str, ...]
    files: tuple[FileSpec, ...]
    build_path: str = ""
    source: tuple[str, ...] | None = None
    options: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class BuildConfig:
    source: tuple[str, ...]
    platforms: tuple[PlatformSpec, ...]
    options: Mapping[str, Any] = field(default_factory=dict)

    def platform(self, name: str) -> PlatformSpec:
        for p in self.platforms:
            if p.name == name:
                return p
        raise KeyError(f"Unknown platform '{name}'")

    def sources_for(self, platform: PlatformSpec) -> tuple[str, ...]:
        return platform.source if platform.source is not None else self.source


@dataclass(frozen=True)
class RenderedFile:
    platform: str
    path: Path
    content: str


# =============================================================================
# 1) PARSE & VALIDATE
# =============================================================================

def _str_list(value: Any, where: str) -> tuple[str, ...]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise BuildConfigError(f"{where}: expected a list of strings")
    return tuple(value)


def _parse_file(raw: Any, where: str) -> FileSpec:
    if not isinstance(raw, dict):
        raise BuildConfigError(f"{where}: file entry must be an object")
    destination, fmt = raw.get("destination"), raw.get("format")
    if not isinstance(destination, str) or not destination:
        raise BuildConfigError(f"{where}: missing 'destination'")
    if fmt not in FORMATS:
        raise BuildConfigError(f"{where}: unknown format {fmt!r}")
    flt = raw.get("filter")
    if flt is not None and flt not in FILTERS:
        raise BuildConfigError(f"{where}: unknown filter {flt!r}")
    return FileSpec(destination, fmt, flt, _frozen(raw.get("options"), where))


def _parse_platform(name: str, raw: Any) -> PlatformSpec:
    where = f"platforms.{name}"
    if not isinstance(raw, dict):
        raise BuildConfigError(f"{where}: platform entry must be an object")
    transforms = _str_list(raw.get("transforms", []), f"{where}.transforms")
    unknown = [t for t in transforms if t not in TRANSFORMS]
    if unknown:
        raise BuildConfigError(f"{where}: unknown transform(s) {', '.join(unknown)}")
    files_raw = raw.get("files")
    if not isinstance(files_raw, list) or not files_raw:
        raise BuildConfigError(f"{where}: 'files' must be a non-empty list")
    source = raw.get("source")
    return PlatformSpec(
        name=name,
        transforms=transforms,
        files=tuple(_parse_file(f, f"{where}.files[{i}]") for i, f in enumerate(files_raw)),
        build_path=str(raw.get("build_path", "")),
        source=None if source is None else _str_list(source, f"{where}.source"),
        options=_frozen(raw.get("options"), where),
    )


def parse_build_config(data: Mapping[str, Any]) -> BuildConfig:
    """
    Does: Validate a raw configuration dict against the transform/format/filter
          tables so a bad name fails before anything is built.
    Raises: BuildConfigError.
    """
    platforms = data.get("platforms")
    if not isinstance(platforms, dict) or not platforms:
        raise BuildConfigError("'platforms' must be a non-empty object")
    source = _str_list(data.get("source", []), "source")
    specs = tuple(_parse_platform(name, raw) for name, raw in platforms.items())
    for spec in specs:
        if not (spec.source if spec.source is not None else source):
            raise BuildConfigError(f"platforms.{spec.name}: no token sources")
    options = {
        "title": data.get("title", DEFAULT_TITLE),
        "namespace": data.get("namespace", DEFAULT_NAMESPACE),
        **_frozen(data.get("options"), "config"),
    }
    return BuildConfig(source=source, platforms=specs, options=MappingProxyType(options))


def load_build_config(path: str | Path | None = None) -> BuildConfig:
    """
    Does: Load platforms.json from the data dir, or the given file, then validate it.
    Raises: BuildConfigError from parse_build_config; config loader errors for I/O and JSON.
    Validated configs are cached until the file changes.
    """
    if path is None:
        return load_config("platforms", mode="validated_dict", validator=parse_build_config)
    p = Path(path)
    return load_config(p.name, mode="validated_dict", base_dir=p.parent, validator=parse_build_config)


# =============================================================================
# 2) BUILD
# =============================================================================

def resolve_platform_tokens(config: BuildConfig, platform: PlatformSpec, *, root: Path) -> TokenCollection:
    """Does: Fresh resolution of this platform's sources, then its transform chain."""
    sources = [root / s for s in config.sources_for(platform)]
    resolved = load_and_resolve(sources)
    return apply_transforms(resolved, platform.transforms, {**config.options, **platform.options})


def build_platform(
    config: BuildConfig,
    platform: PlatformSpec,
    *,
    root: str | Path = ".",
    timestamp: str | datetime | None = None,
) -> list[RenderedFile]:
    """
    Does: Resolve, transform, filter and render every file of one platform.
    Returns: RenderedFile list (nothing written).
    Raises: BuildError wrapping the underlying failure.
    """
    root = Path(root)
    stamp = timestamp or datetime.now(timezone.utc)
    try:
        tokens = resolve_platform_tokens(config, platform, root=root)
        out: list[RenderedFile] = []
        for spec in platform.files:
            selected = tokens.filter(FILTERS[spec.filter]) if spec.filter else tokens
            options = {**config.options, **platform.options, **spec.options, "timestamp": stamp}
            content = render(spec.format, selected, options)
            out.append(RenderedFile(platform.name, root / platform.build_path / spec.destination, content))
            debug(f"{platform.name}: {spec.format} → {spec.destination} ({len(selected)} tokens)", topic="build")
    except Exception as e:
        raise BuildError(platform.name, e) from e
    return out


def render_all_platforms(
    config: BuildConfig,
    *,
    root: str | Path = ".",
    only: Iterable[str] | None = None,
    timestamp: str | datetime | None = None,
) -> list[RenderedFile]:
    """Does: Render the selected platforms sequentially; the first failure aborts."""
    names = set(only) if only else None
    if names:
        unknown = names - {p.name for p in config.platforms}
        if unknown:
            raise BuildConfigError(f"Unknown platform(s): {', '.join(sorted(unknown))}")
    stamp = generation_timestamp({"timestamp": timestamp})
    rendered: list[RenderedFile] = []
    for platform in config.platforms:
        if names is None or platform.name in names:
            logger.info("Building platform %s", platform.name)
            rendered.extend(build_platform(config, platform, root=root, timestamp=stamp))
    return rendered


def write_outputs(files: Sequence[RenderedFile]) -> None:
    for f in files:
        f.path.parent.mkdir(parents=True, exist_ok=True)
        f.path.write_text(f.content, encoding="utf-8")
        logger.debug("Wrote %s", f.path)


def build_all_platforms(
    config: BuildConfig,
    *,
    root: str | Path = ".",
    only: Iterable[str] | None = None,
    timestamp: str | datetime | None = None,
) -> list[RenderedFile]:
    """Does: render_all_platforms() then write every file; nothing is written on failure."""
    files = render_all_platforms(config, root=root, only=only, timestamp=timestamp)
    write_outputs(files)
    return files
