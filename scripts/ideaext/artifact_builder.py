"""IDE artifact materialization.

Walks an artifact tree depth-first and produces the described layout on
disk: directories become directories, archives become deflated zip files
(nested archives are packed as entries of their parent), and leaf nodes copy
files, directory contents, extracted archive entries, module roots and
library binaries into the current location.

Any missing source or unresolvable reference aborts the whole build with an
``ArtifactError`` subclass. Archives are assembled in memory and written to a
temporary file that is only moved into place once complete.
"""

import io
import logging
import os
import shutil
import tempfile
import zipfile
from collections import OrderedDict
from pathlib import Path, PurePosixPath
from typing import Optional

from .errors import (
    ArtifactBuildError,
    ArtifactCycleError,
    ArtifactError,
    MissingSourceError,
    UnknownArtifactError,
)
from .ide_artifacts import (
    ArchiveNode,
    ArtifactContainer,
    ArtifactRefNode,
    DirectoryContentNode,
    DirectoryNode,
    ExtractedDirectoryNode,
    FileNode,
    LibraryFilesNode,
    ModuleOutputNode,
    ModuleSourceNode,
    ModuleTestOutputNode,
    TopLevelArtifact,
)
from .project_models import ProjectModel

logger = logging.getLogger(__name__)

# Relative to the project's build directory.
DEFAULT_DESTINATION = "idea-artifacts"


def _mkdirs(path: Path):
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ArtifactBuildError(f"Cannot create directory {path}: {exc}") from exc


class _DirectoryOutput:
    """Writes materialized entries below a directory on disk.

    Siblings are not required to have distinct names. When an entry lands on
    a path already taken by an entry of the other kind (a file where a
    directory was, or the reverse), the earlier one is removed, so the last
    declared entry wins.
    """

    def __init__(self, root: Path):
        self.root = root

    def _claim(self, target: Path, as_dir: bool):
        rel = target.relative_to(self.root)
        try:
            # Ancestors between root and target, outermost first.
            for parent in reversed(list(rel.parents)[:-1]):
                path = self.root / parent
                if path.is_symlink() or (path.exists() and not path.is_dir()):
                    logger.debug("Replacing file %s with a directory", path)
                    path.unlink()
            if as_dir:
                if target.is_symlink() or (target.exists() and not target.is_dir()):
                    logger.debug("Replacing file %s with a directory", target)
                    target.unlink()
            elif target.is_dir() and not target.is_symlink():
                logger.debug("Replacing directory %s with a file", target)
                shutil.rmtree(target)
        except OSError as exc:
            raise ArtifactBuildError(f"Cannot replace {target}: {exc}") from exc

    def directory(self, name: str) -> "_DirectoryOutput":
        path = self.root / name
        self._claim(path, as_dir=True)
        _mkdirs(path)
        return _DirectoryOutput(path)

    def make_dirs(self, rel: str):
        path = self.root / rel
        self._claim(path, as_dir=True)
        _mkdirs(path)

    def copy_file(self, source: Path, rel: str):
        target = self.root / rel
        self._claim(target, as_dir=False)
        _mkdirs(target.parent)
        try:
            shutil.copyfile(source, target)
        except OSError as exc:
            raise ArtifactBuildError(f"Cannot copy {source} to {target}: {exc}") from exc

    def write_bytes(self, rel: str, data: bytes):
        target = self.root / rel
        self._claim(target, as_dir=False)
        _mkdirs(target.parent)
        try:
            target.write_bytes(data)
        except OSError as exc:
            raise ArtifactBuildError(f"Cannot write {target}: {exc}") from exc

    def write_archive(self, name: str, archive: "_ArchiveOutput"):
        target = self.root / name
        self._claim(target, as_dir=False)
        try:
            fd, tmp = tempfile.mkstemp(prefix=f".{name}.", suffix=".tmp", dir=self.root)
        except OSError as exc:
            raise ArtifactBuildError(f"Cannot create archive {target}: {exc}") from exc
        try:
            with os.fdopen(fd, "wb") as fh:
                archive.write_to(fh)
            os.replace(tmp, target)
        except OSError as exc:
            raise ArtifactBuildError(f"Cannot write archive {target}: {exc}") from exc
        finally:
            if os.path.exists(tmp):
                os.unlink(tmp)


class _ArchiveOutput:
    """Collects archive entries in declaration order.

    Entries share one table across nested directories; each directory view
    only adds its path prefix. Writing an existing entry replaces its content
    and keeps its original position. An entry of the other kind at the same
    path (a file where a directory was, or the reverse) is dropped first, as
    on disk. Directory markers are only emitted for directories that end up
    without any file below them.
    """

    def __init__(self, entries: Optional[OrderedDict] = None, prefix: str = ""):
        self.entries = entries if entries is not None else OrderedDict()
        self.prefix = prefix

    def _drop_file(self, name: str):
        if self.entries.get(name) is not None:
            logger.debug("Archive entry %s replaced by a directory", name)
            del self.entries[name]

    def _claim(self, path: str, as_dir: bool):
        parts = path.split("/")
        for i in range(1, len(parts)):
            self._drop_file("/".join(parts[:i]))
        if as_dir:
            self._drop_file(path)
            return
        below = [n for n in self.entries if n.startswith(f"{path}/")]
        if below:
            logger.debug("Archive directory %s/ replaced by a file", path)
        for name in below:
            del self.entries[name]

    def directory(self, name: str) -> "_ArchiveOutput":
        path = f"{self.prefix}{name}"
        self._claim(path, as_dir=True)
        self.entries.setdefault(f"{path}/", None)
        return _ArchiveOutput(self.entries, f"{path}/")

    def make_dirs(self, rel: str):
        path = f"{self.prefix}{rel.rstrip('/')}"
        self._claim(path, as_dir=True)
        self.entries.setdefault(f"{path}/", None)

    def copy_file(self, source: Path, rel: str):
        try:
            data = Path(source).read_bytes()
        except OSError as exc:
            raise ArtifactBuildError(f"Cannot read {source}: {exc}") from exc
        self.write_bytes(rel, data)

    def write_bytes(self, rel: str, data: bytes):
        path = f"{self.prefix}{rel}"
        self._claim(path, as_dir=False)
        self.entries[path] = data

    def write_archive(self, name: str, archive: "_ArchiveOutput"):
        buf = io.BytesIO()
        archive.write_to(buf)
        self.write_bytes(name, buf.getvalue())

    def _zip_entries(self):
        files = [n for n, data in self.entries.items() if data is not None]
        for name, data in self.entries.items():
            if data is None:
                if any(f.startswith(name) for f in files):
                    continue
                yield name, b""
            else:
                yield name, data

    def write_to(self, fileobj):
        with zipfile.ZipFile(fileobj, "w", zipfile.ZIP_DEFLATED) as zf:
            for name, data in self._zip_entries():
                zf.writestr(name, data)


def _walk_files(root: Path):
    """Yield ``(path, relative posix path)`` for everything below ``root``, sorted."""
    for path in sorted(root.rglob("*")):
        yield path, path.relative_to(root).as_posix()


class ArtifactBuilder:
    """Materializes artifact trees of one project.

    Args:
        project: Resolves source paths, modules and dependency configurations.
        artifacts: Top-level collection used to resolve ``artifact(name)``
            references. Trees without references do not need it.
    """

    def __init__(self, project: ProjectModel, artifacts: Optional[ArtifactContainer] = None):
        self.project = project
        self.artifacts = artifacts
        self._building = []

    def create_artifact(self, tree, destination=None) -> Optional[Path]:
        """Materialize ``tree`` into ``destination``.

        Args:
            tree: Root node, usually a TopLevelArtifact. ``None`` is a no-op
                and does not create the destination directory.
            destination: Output directory. Relative paths resolve against the
                project directory. Defaults to
                ``<build_dir>/idea-artifacts``.

        Returns:
            Path of the produced directory or archive, or ``None`` for an
            absent tree.

        Raises:
            ArtifactError: On the first missing source, unresolved
                reference or write failure.
        """
        if tree is None:
            logger.debug("No artifact configured, nothing to build")
            return None

        if destination is None:
            dest = self.project.build_dir / DEFAULT_DESTINATION
        else:
            dest = self.project.resolve_path(destination)
        _mkdirs(dest)

        self._building = []
        self._build(tree, _DirectoryOutput(dest))
        result = dest / tree.name
        logger.info("Built artifact '%s' in %s", tree.name, result)
        return result

    def _build_children(self, children: list, out):
        for child in children:
            self._build(child, out)

    def _build(self, node, out):
        logger.debug("Materializing %s node", node.type.value)
        if isinstance(node, TopLevelArtifact):
            if node.name in self._building:
                raise ArtifactCycleError(f"Artifact '{node.name}' references itself")
            self._building.append(node.name)
            try:
                self._build_children(node.children, out.directory(node.name))
            finally:
                self._building.pop()
        elif isinstance(node, DirectoryNode):
            self._build_children(node.children, out.directory(node.name))
        elif isinstance(node, ArchiveNode):
            archive = _ArchiveOutput()
            self._build_children(node.children, archive)
            out.write_archive(node.name, archive)
        elif isinstance(node, FileNode):
            for p in node.paths:
                source = self._existing(p, "File")
                if not source.is_file():
                    raise MissingSourceError(f"File {source} is not a regular file")
                out.copy_file(source, source.name)
        elif isinstance(node, DirectoryContentNode):
            for p in node.paths:
                self._copy_tree(self._existing_dir(p), out)
        elif isinstance(node, ExtractedDirectoryNode):
            for p in node.paths:
                self._extract(self._existing(p, "Archive"), out)
        elif isinstance(node, ModuleSourceNode):
            module = self.project.find_module(node.module_name)
            self._copy_roots(module.source_roots, out)
        elif isinstance(node, ModuleOutputNode):
            module = self.project.find_module(node.module_name)
            self._copy_roots(module.output_roots, out)
        elif isinstance(node, ModuleTestOutputNode):
            module = self.project.find_module(node.module_name)
            self._copy_roots(module.test_output_roots, out)
        elif isinstance(node, LibraryFilesNode):
            self._copy_libraries(node, out)
        elif isinstance(node, ArtifactRefNode):
            self._build_reference(node.artifact_name, out)
        else:
            raise TypeError(f"Unsupported artifact node: {node!r}")

    def _existing(self, path, what: str) -> Path:
        source = self.project.resolve_path(path)
        if not source.exists():
            raise MissingSourceError(f"{what} {source} does not exist")
        return source

    def _existing_dir(self, path) -> Path:
        source = self._existing(path, "Directory")
        if not source.is_dir():
            raise MissingSourceError(f"{source} is not a directory")
        return source

    def _copy_tree(self, root: Path, out):
        for path, rel in _walk_files(root):
            if path.is_dir():
                out.make_dirs(rel)
            else:
                out.copy_file(path, rel)

    def _copy_roots(self, roots: list, out):
        # Modules commonly declare roots that were never created (no resources etc.)
        for root in roots:
            path = self.project.resolve_path(root)
            if not path.is_dir():
                logger.debug("Skipping missing module root %s", path)
                continue
            self._copy_tree(path, out)

    def _extract(self, archive: Path, out):
        try:
            zf = zipfile.ZipFile(archive)
        except (OSError, zipfile.BadZipFile) as exc:
            raise ArtifactBuildError(f"Cannot open archive {archive}: {exc}") from exc
        with zf:
            for info in zf.infolist():
                name = PurePosixPath(info.filename)
                if name.is_absolute() or ".." in name.parts:
                    raise ArtifactError(f"Archive {archive} has unsafe entry '{info.filename}'")
                if info.is_dir():
                    out.make_dirs(info.filename)
                else:
                    out.write_bytes(info.filename, zf.read(info))

    def _copy_libraries(self, node: LibraryFilesNode, out):
        cfg = self.project.resolve_configuration(node.configuration)
        written = set()
        for lib in cfg.libraries:
            source = self.project.resolve_path(lib.file)
            if not source.is_file():
                raise MissingSourceError(
                    f"Library {lib.group}:{lib.artifact}:{lib.version} file {source} does not exist"
                )
            if source.name in written:
                logger.debug("Library file %s replaces an earlier file with the same name", source.name)
            written.add(source.name)
            out.copy_file(source, source.name)

    def _build_reference(self, name: str, out):
        if self.artifacts is None:
            raise UnknownArtifactError(f"Artifact '{name}' cannot be resolved without an artifact collection")
        if name in self._building:
            chain = " -> ".join(self._building + [name])
            raise ArtifactCycleError(f"Artifact reference cycle: {chain}")
        target = self.artifacts.get(name)
        self._building.append(name)
        try:
            self._build_children(target.children, out)
        finally:
            self._building.pop()


def create_artifact(
    tree,
    project: ProjectModel,
    destination=None,
    artifacts: Optional[ArtifactContainer] = None,
) -> Optional[Path]:
    """Materialize ``tree`` for ``project``. See ``ArtifactBuilder.create_artifact``."""
    return ArtifactBuilder(project, artifacts).create_artifact(tree, destination)
