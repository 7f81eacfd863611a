"""Tests for project_models.py: project paths, modules and configurations."""

from pathlib import Path

import pytest

from ideaext.errors import UnresolvedConfigurationError, UnresolvedModuleError
from ideaext.project_models import DependencyConfiguration, ProjectModel, ResolvedLibrary, SourceModule


class TestProjectModel:
    def test_default_build_dir(self, tmp_path):
        project = ProjectModel(tmp_path)
        assert project.build_dir == tmp_path / "build"

    def test_relative_build_dir(self, tmp_path):
        project = ProjectModel(tmp_path, build_dir="out")
        assert project.build_dir == tmp_path / "out"

    def test_resolve_relative_and_absolute(self, tmp_path):
        project = ProjectModel(tmp_path)
        assert project.resolve_path("a/b.txt") == tmp_path / "a" / "b.txt"
        assert project.resolve_path(tmp_path / "x") == tmp_path / "x"

    def test_find_module(self, project):
        module = project.add_module(SourceModule("core", source_roots=["core/src"]))
        assert project.find_module("core") is module

    def test_unknown_module(self, project):
        with pytest.raises(UnresolvedModuleError, match="'ghost'"):
            project.find_module("ghost")

    def test_resolve_configuration_by_name(self, project):
        cfg = project.add_configuration("runtime")
        assert project.resolve_configuration("runtime") is cfg

    def test_configuration_object_passes_through(self, project):
        cfg = DependencyConfiguration("detached")
        assert project.resolve_configuration(cfg) is cfg

    def test_unknown_configuration(self, project):
        with pytest.raises(UnresolvedConfigurationError):
            project.resolve_configuration("compileClasspath")


class TestResolvedLibrary:
    def test_from_notation(self):
        lib = ResolvedLibrary.from_notation("org.hamcrest:hamcrest-core:1.3", "repo/hamcrest-core-1.3.jar")
        assert lib.coordinates() == {"group": "org.hamcrest", "artifact": "hamcrest-core", "version": "1.3"}
        assert lib.file == Path("repo/hamcrest-core-1.3.jar")

    @pytest.mark.parametrize("notation", ["junit:junit", "a:b:c:d", "junit::4.12"])
    def test_bad_notation(self, notation):
        with pytest.raises(ValueError):
            ResolvedLibrary.from_notation(notation, "x.jar")
