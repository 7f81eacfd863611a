"""Shared test fixtures for the idea-ext test suite."""

import zipfile
from pathlib import Path

import pytest

from ideaext.ide_artifacts import ArtifactContainer
from ideaext.project_models import ProjectModel, ResolvedLibrary, SourceModule


@pytest.fixture
def project(tmp_path):
    """A project rooted in a fresh ``project`` directory under tmp_path."""
    root = tmp_path / "project"
    root.mkdir()
    return ProjectModel(root)


@pytest.fixture
def artifacts():
    return ArtifactContainer()


@pytest.fixture
def write_file(project):
    """Factory fixture that writes a text file below the project and returns its path."""
    def _write(relative: str, content: str = "") -> Path:
        path = project.project_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def make_zip(project):
    """Factory fixture that writes a zip archive from a ``{entry: text}`` mapping."""
    def _make(relative: str, entries: dict) -> Path:
        path = project.project_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(path, "w") as zf:
            for name, content in entries.items():
                zf.writestr(name, content)
        return path
    return _make


@pytest.fixture
def junit_libraries(write_file):
    """Two resolved libraries as a dependency resolver would return them."""
    return [
        ResolvedLibrary.from_notation("junit:junit:4.12", write_file("repo/junit-4.12.jar", "junit")),
        ResolvedLibrary.from_notation(
            "org.hamcrest:hamcrest-core:1.3", write_file("repo/hamcrest-core-1.3.jar", "hamcrest")
        ),
    ]


@pytest.fixture
def app_module(project, write_file):
    """A module with one source root, class and resource outputs and a test output."""
    write_file("app/src/main/java/com/example/App.java", "class App {}")
    write_file("app/src/main/java/com/example/util/Strings.java", "class Strings {}")
    write_file("app/build/classes/com/example/App.class", "bytecode")
    write_file("app/build/resources/app.properties", "key=value")
    write_file("app/build/test-classes/com/example/AppTest.class", "test bytecode")
    return project.add_module(SourceModule(
        name="app",
        source_roots=["app/src/main/java", "app/src/main/kotlin"],
        output_roots=["app/build/classes", "app/build/resources"],
        test_output_roots=["app/build/test-classes"],
    ))
