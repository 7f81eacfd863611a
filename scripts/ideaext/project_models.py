"""Build project data model.

Plain data structures describing the parts of the host build that IDE
settings and artifacts refer to: the project directories, named modules with
their source and output roots, and resolved dependency configurations.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from .errors import SettingsError, UnresolvedConfigurationError, UnresolvedModuleError


@dataclass
class ResolvedLibrary:
    """A single resolved binary dependency.

    Attributes:
        group: Maven groupId (e.g. ``junit``).
        artifact: Maven artifactId (e.g. ``junit``).
        version: Resolved version string (e.g. ``4.12``).
        file: Path to the resolved binary on disk.
    """
    group: str
    artifact: str
    version: str
    file: Path

    @classmethod
    def from_notation(cls, notation: str, file) -> "ResolvedLibrary":
        """Build a library from ``group:artifact:version`` notation.

        Args:
            notation: Colon separated GAV coordinates.
            file: Path to the resolved binary.

        Returns:
            A populated ResolvedLibrary.

        Raises:
            SettingsError: If the notation does not have exactly three parts.
        """
        parts = notation.split(":")
        if len(parts) != 3 or not all(parts):
            raise SettingsError(f"Expected 'group:artifact:version', got '{notation}'")
        group, artifact, version = parts
        return cls(group=group, artifact=artifact, version=version, file=Path(file))

    def coordinates(self) -> dict:
        return {"group": self.group, "artifact": self.artifact, "version": self.version}


@dataclass
class DependencyConfiguration:
    """A named dependency scope and its resolved libraries, in resolution order.

    Attributes:
        name: Configuration name (e.g. ``runtimeClasspath``).
        libraries: Resolved libraries.
    """
    name: str
    libraries: list = field(default_factory=list)


@dataclass
class SourceModule:
    """A build module (source set) as seen by the IDE.

    Root paths may be relative; they are resolved against the project
    directory when used.

    Attributes:
        name: Module name referenced by ``module_src``/``module_output`` nodes.
        source_roots: Source directories (``src/main/java``, ...).
        output_roots: Production output directories (classes, resources).
        test_output_roots: Test output directories.
    """
    name: str
    source_roots: list = field(default_factory=list)
    output_roots: list = field(default_factory=list)
    test_output_roots: list = field(default_factory=list)


@dataclass
class ProjectModel:
    """The project that IDE settings and artifacts are evaluated against.

    Attributes:
        project_dir: Root directory; relative paths resolve against it.
        build_dir: Build output root. Defaults to ``<project_dir>/build``.
        modules: Module name to SourceModule.
        configurations: Configuration name to DependencyConfiguration.
    """
    project_dir: Path
    build_dir: Optional[Path] = None
    modules: dict = field(default_factory=dict)
    configurations: dict = field(default_factory=dict)

    def __post_init__(self):
        self.project_dir = Path(self.project_dir).absolute()
        if self.build_dir is None:
            self.build_dir = self.project_dir / "build"
        else:
            self.build_dir = self.resolve_path(self.build_dir)

    def resolve_path(self, path) -> Path:
        """Resolve a path against the project directory (absolute paths pass through)."""
        p = Path(path)
        if p.is_absolute():
            return p
        return self.project_dir / p

    def add_module(self, module: SourceModule) -> SourceModule:
        self.modules[module.name] = module
        return module

    def find_module(self, name: str) -> SourceModule:
        """Look up a module by name.

        Raises:
            UnresolvedModuleError: If no module with that name is registered.
        """
        try:
            return self.modules[name]
        except KeyError:
            raise UnresolvedModuleError(f"Module '{name}' is not defined in {self.project_dir}") from None

    def add_configuration(self, name: str, libraries=()) -> DependencyConfiguration:
        """Register (or replace) a dependency configuration and return it."""
        cfg = DependencyConfiguration(name=name, libraries=list(libraries))
        self.configurations[name] = cfg
        return cfg

    def resolve_configuration(
        self, ref: Union[str, DependencyConfiguration]
    ) -> DependencyConfiguration:
        """Resolve a configuration reference to its libraries.

        Args:
            ref: A configuration name, or a DependencyConfiguration which is
                returned as-is.

        Raises:
            UnresolvedConfigurationError: If a name is not registered.
        """
        if isinstance(ref, DependencyConfiguration):
            return ref
        try:
            return self.configurations[ref]
        except KeyError:
            raise UnresolvedConfigurationError(
                f"Configuration '{ref}' is not defined in {self.project_dir}"
            ) from None
