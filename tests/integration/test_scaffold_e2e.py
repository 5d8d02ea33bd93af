"""Integration tests for the init-then-create flow.

These tests run the real scaffolder against a temporary project root and
check the registry, ledger and generated files together. No external
services (Bun, Node) are required.
"""

from __future__ import annotations

import json
import re
from pathlib import Path

import pytest

from apimod.config import FsOptions, ScaffoldConfig
from apimod.engine.registry import register_route
from apimod.errors import TargetExistsError
from apimod.scaffolder import ModuleGenerator, ProjectInitializer


def _entries(registry: str) -> list[str]:
    body = re.search(r"export const apiRoutes = \[([^\]]*)\]", registry).group(1)
    return [t.strip() for t in body.split(",") if t.strip()]


@pytest.mark.integration
class TestScaffoldFlow:
    def test_register_example_scenario(self, tmp_path: Path):
        """Empty registry, register users twice, second call is a no-op."""
        config = ScaffoldConfig(project_root=tmp_path)
        opts = FsOptions()
        ProjectInitializer(config).run(opts)
        config.registry_path.write_text("export const apiRoutes = [];\n", encoding="utf-8")

        register_route(config.registry_path, "users.ts", "usersRoute", opts)
        after_first = config.registry_path.read_text(encoding="utf-8")
        assert 'import { usersRoute } from "./users";' in after_first
        assert _entries(after_first).count("usersRoute") == 1

        register_route(config.registry_path, "users.ts", "usersRoute", opts)
        assert config.registry_path.read_text(encoding="utf-8") == after_first

    def test_full_project(self, tmp_path: Path):
        config = ScaffoldConfig(project_root=tmp_path / "shop-api")
        config.project_root.mkdir()
        opts = FsOptions()

        ProjectInitializer(config).run(opts)
        gen = ModuleGenerator(config)
        for module_path in ("product", "category", "admin/user"):
            gen.run(module_path, opts)

        registry = config.registry_path.read_text(encoding="utf-8")
        assert _entries(registry) == [
            "testsRoute",
            "productsRoute",
            "categoriesRoute",
            "usersRoute",
        ]
        # every listed identifier has exactly one import and a route file
        for identifier in _entries(registry):
            imports = re.findall(
                rf'^import \{{ {identifier} \}} from "\./([\w-]+)";$', registry, re.MULTILINE
            )
            assert len(imports) == 1
            assert config.route_file_path(imports[0]).is_file()

        state = json.loads(config.state_path.read_text(encoding="utf-8"))
        assert [m["modulePath"] for m in state["modules"]] == [
            "test", "product", "category", "admin/user",
        ]
        log_lines = config.log_path.read_text(encoding="utf-8").splitlines()
        assert len(log_lines) == 4
        assert log_lines[0].endswith("init -> module: test | route: /tests")

    def test_same_route_for_two_modules_is_refused(self, tmp_path: Path):
        config = ScaffoldConfig(project_root=tmp_path)
        opts = FsOptions()
        ProjectInitializer(config).run(opts)
        ModuleGenerator(config).run("user", opts)

        # admin/user maps onto the same route file as user
        with pytest.raises(TargetExistsError):
            ModuleGenerator(config).run("admin/user", opts)
