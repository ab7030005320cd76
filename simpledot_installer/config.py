from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Tuple

from .lib.archive import ArchiveBundle
from .lib.bootloader import GrubThemeSettings
from .lib.display_manager import SddmThemeSettings
from .lib.sync import FileTransferSpec
from .lib.vcs import RepositorySource

DEFAULT_REPOSITORY = "https://github.com/xealea/simple-dot"
DEFAULT_CHECKOUT_NAME = "simple-dot"

DEFAULT_EXCLUSIONS = (
    ".git",
    "README-ID.md",
    "README-EN.md",
    "README.md",
    "README-KEYBIND.md",
    "PACKAGE-LIST.md",
    "dotfiles_install.sh",
)

# Relative to the checkout; "." is the checkout itself.
DEFAULT_SIZE_REPORT = (
    ".",
    "misc",
    ".config",
    ".fehbg",
    ".fonts",
    ".icons",
    ".themes",
    ".wall",
    ".nanorc",
    ".gtkrc-2.0",
)

# (archive relative to home, extract dir relative to home, label), extracted in this order.
DEFAULT_BUNDLES = (
    (".fonts/glyph-font.tar.xz", ".fonts", "fonts"),
    (".themes/decay.tar.xz", ".themes", "GTK theme"),
    (".icons/adecay.tar.xz", ".icons", "icons"),
    (".icons/xdecay.tar.xz", ".icons", "cursor"),
)


@dataclass(frozen=True)
class InstallerConfig:
    """Read-only view over a raw config mapping; every key is optional."""

    raw: Dict[str, Any] = field(default_factory=dict)

    def _section(self, name: str) -> Dict[str, Any]:
        return self.raw.get(name) or {}

    @property
    def home(self) -> Path:
        return Path(str(self.raw.get("home") or Path.home())).expanduser()

    @property
    def repository_url(self) -> str:
        return str(self.raw.get("repository") or DEFAULT_REPOSITORY)

    @property
    def destination(self) -> Path:
        dest = self.raw.get("destination")
        if dest:
            return Path(str(dest)).expanduser()
        return self.home / DEFAULT_CHECKOUT_NAME

    @property
    def repository(self) -> RepositorySource:
        return RepositorySource(url=self.repository_url, local_path=self.destination)

    @property
    def clone_depth(self) -> int:
        return int(self.raw.get("clone_depth", 1) or 0)

    @property
    def exclusions(self) -> Tuple[str, ...]:
        return tuple(self.raw.get("exclusions") or DEFAULT_EXCLUSIONS)

    @property
    def transfer_spec(self) -> FileTransferSpec:
        return FileTransferSpec(
            source=self.destination,
            destination=self.home,
            exclusions=frozenset(self.exclusions),
        )

    @property
    def size_report_paths(self) -> List[Path]:
        rels = self.raw.get("size_report") or DEFAULT_SIZE_REPORT
        return [self.destination if rel in {".", ""} else self.destination / str(rel) for rel in rels]

    @property
    def license_source(self) -> Path:
        lic = self._section("license")
        return self.home / str(lic.get("source") or "LICENSE")

    @property
    def license_target(self) -> Path:
        lic = self._section("license")
        return self.home / str(lic.get("target") or ".config/LICENSE-SIMPLE-DOT")

    @property
    def bundles(self) -> List[ArchiveBundle]:
        items = self.raw.get("bundles")
        if items:
            triples = [(b["archive"], b["extract_to"], b.get("label", "")) for b in items]
        else:
            triples = list(DEFAULT_BUNDLES)
        return [
            ArchiveBundle(archive_path=self.home / archive, extract_to=self.home / extract_to, label=label)
            for archive, extract_to, label in triples
        ]

    @property
    def shell(self) -> str:
        return str(self.raw.get("shell") or "fish")

    @property
    def terminal(self) -> str:
        return str(self.raw.get("terminal") or "alacritty")

    @property
    def sudo(self) -> str:
        return str(self.raw.get("sudo") or "sudo")

    @property
    def grub(self) -> GrubThemeSettings:
        g = self._section("grub")
        defaults = GrubThemeSettings(theme_source=self.destination / "misc/grub")
        return GrubThemeSettings(
            theme_source=Path(g["theme_source"]) if g.get("theme_source") else defaults.theme_source,
            share_dir=str(g.get("share_dir") or defaults.share_dir),
            theme_line=str(g.get("theme_line") or defaults.theme_line),
            default_file=str(g.get("default_file") or defaults.default_file),
            grub_cfg=str(g.get("grub_cfg") or defaults.grub_cfg),
        )

    @property
    def sddm(self) -> SddmThemeSettings:
        s = self._section("sddm")
        defaults = SddmThemeSettings(
            theme_source=self.destination / "misc/sddm",
            config_source=self.destination / "misc/sddm.conf.d/sddm.conf",
        )
        return SddmThemeSettings(
            theme_source=Path(s["theme_source"]) if s.get("theme_source") else defaults.theme_source,
            config_source=Path(s["config_source"]) if s.get("config_source") else defaults.config_source,
            share_dir=str(s.get("share_dir") or defaults.share_dir),
            theme_dir=str(s.get("theme_dir") or defaults.theme_dir),
            config_dest=str(s.get("config_dest") or defaults.config_dest),
            config_path=str(s.get("config_path") or defaults.config_path),
            preview=bool(s.get("preview", defaults.preview)),
        )

    @property
    def dry_run(self) -> bool:
        return bool(self.raw.get("dry_run", False))

    def with_overrides(self, **overrides: Any) -> "InstallerConfig":
        return InstallerConfig(raw={**self.raw, **overrides})


def load_config(path: str) -> InstallerConfig:
    p = Path(path).expanduser()
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("installer config must be YAML")

    try:
        import yaml  # type: ignore
    except Exception as e:
        raise RuntimeError("PyYAML is required to read the installer config") from e

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"{path} is not valid YAML: {e}") from e
    if not isinstance(raw, dict):
        raise ValueError(f"{path} must contain a mapping/object")

    return InstallerConfig(raw=raw)
