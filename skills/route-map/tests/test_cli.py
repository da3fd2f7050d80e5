import io
import json
import os
import sys
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

# Add scripts/ to path to import modules
sys.path.append(os.path.join(os.path.dirname(__file__), "../scripts"))

from cli.config import parse_workers, resolve_project_path
from cli.main import format_result, main
from route_model import ExtractionResult, FrameworkInfo, FrameworkName, ImportedComponent, RouteInfo


def run_main(argv):
    out, err = io.StringIO(), io.StringIO()
    with redirect_stdout(out), redirect_stderr(err):
        code = main(argv)
    return code, out.getvalue(), err.getvalue()


class TestCli(unittest.TestCase):
    def test_version(self):
        code, out, _ = run_main(["--version"])
        self.assertEqual(code, 0)
        self.assertTrue(out.startswith("route-map v"))

    def test_missing_argument(self):
        code, out, err = run_main([])
        self.assertEqual(code, 2)
        self.assertEqual(out, "")
        self.assertIn("Project path is required", err)

    def test_missing_project_exits_nonzero(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            code, out, _ = run_main(["--json", str(Path(temp_dir) / "missing")])
            self.assertEqual(code, 1)
            payload = json.loads(out)
            self.assertEqual(payload["routes"], [])
            self.assertIn("does not exist", payload["errors"][0])

    def test_json_output(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            repo = Path(temp_dir)
            (repo / "pages" / "users").mkdir(parents=True)
            (repo / "package.json").write_text(json.dumps({"dependencies": {"next": "13.5.0"}}), encoding="utf-8")
            (repo / "pages" / "index.tsx").write_text("export default () => null;\n", encoding="utf-8")
            (repo / "pages" / "users" / "[id].tsx").write_text("export default () => null;\n", encoding="utf-8")

            code, out, _ = run_main(["--json", "--no-external-tools", "--workers", "2", str(repo)])
            self.assertEqual(code, 0)
            payload = json.loads(out)
            self.assertEqual(payload["framework"], {"name": "nextjs", "version": "13.5.0"})
            self.assertEqual([route["path"] for route in payload["routes"]], ["/", "/users/:id"])
            self.assertTrue(payload["routes"][1]["dynamic"])
            self.assertEqual(payload["errors"], [])

    def test_text_output(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            code, out, _ = run_main(["--no-external-tools", temp_dir])
            self.assertEqual(code, 1)
            self.assertIn("framework: unknown", out)
            self.assertIn("[ERRORS]", out)
            self.assertIn("Unsupported or unknown framework", out)

    def test_json_and_pretty_are_exclusive(self):
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                main(["--json", "--pretty", "."])

    def test_format_nested_routes(self):
        child = RouteInfo(path="settings", component="src/App.tsx", children=[])
        parent = RouteInfo(
            path="/app/:team",
            component="src/App.tsx",
            children=[child],
            dynamic=True,
            resolved_component_path="src/Layout.tsx",
            imported_component=ImportedComponent("Layout", "./Layout", "src/Layout.tsx"),
        )
        result = ExtractionResult(
            framework=FrameworkInfo(FrameworkName.REACT_ROUTER_DOM, "6.22.0"),
            routes=[parent],
            warnings=["Error parsing file src/bad.tsx: syntax error at src/bad.tsx:1:1"],
        )
        text = format_result(result)
        self.assertIn("framework: react-router-dom", text)
        self.assertIn("version: 6.22.0", text)
        self.assertIn("1. /app/:team", text)
        self.assertIn("imported: Layout from ./Layout", text)
        self.assertIn("dynamic: yes", text)
        self.assertIn("1.1. settings", text)
        self.assertIn("[WARNINGS]", text)
        self.assertNotIn("[ERRORS]", text)

    def test_config_helpers(self):
        self.assertIsNone(parse_workers(None))
        self.assertEqual(parse_workers(0), 1)
        self.assertEqual(parse_workers(8), 8)
        self.assertEqual(resolve_project_path("app", cwd=Path("/work")), Path("/work/app"))
        self.assertEqual(resolve_project_path("/abs/app"), Path("/abs/app"))


if __name__ == "__main__":
    unittest.main()
