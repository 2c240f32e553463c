"""Tests for the declaration cache, usage evaluation and unused report."""

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock

from sceneloom.core.ast_parser import DeclarationResult, FieldDeclaration, ParseError
from sceneloom.core.scene import BehaviourReference
from sceneloom.core.usage import (
    DeclarationCache,
    UnusedScript,
    UsageEvaluator,
    UsageRegistry,
    find_unused_scripts,
    write_unused_report,
)
from sceneloom.core.usage.report import REPORT_HEADER


# ── Fixtures ──────────────────────────────────────────────────────────────

SCRIPT_PATH = "/project/Assets/Scripts/Car.cs"


def _result(path, *names, ok=True):
    errors = [] if ok else [ParseError(file_path=path, line=0, message="boom", severity="error")]
    fields = [FieldDeclaration(name=n, type_name="float", line=1, serializable=True) for n in names]
    return DeclarationResult(file_path=path, language="csharp", fields=fields, errors=errors)


def _reference(*names, path=SCRIPT_PATH, guid="G1"):
    return BehaviourReference(script_guid=guid, script_path=path, property_names=frozenset(names))


def _evaluator(extractor):
    cache = DeclarationCache(extractor=extractor)
    registry = UsageRegistry()
    return UsageEvaluator(cache, registry), cache, registry


# ── Tests: Declaration cache ─────────────────────────────────────────────


class TestDeclarationCache:
    def test_scans_once_per_path(self):
        extractor = MagicMock(side_effect=lambda p: _result(p, "speed"))
        cache = DeclarationCache(extractor=extractor)

        first = cache.get(SCRIPT_PATH)
        second = cache.get(SCRIPT_PATH)

        assert first is second
        extractor.assert_called_once_with(SCRIPT_PATH)

    def test_concurrent_callers_share_one_scan(self):
        calls = []
        lock = threading.Lock()

        def slow_extractor(path):
            with lock:
                calls.append(path)
            time.sleep(0.05)
            return _result(path, "speed", "power")

        cache = DeclarationCache(extractor=slow_extractor)
        with ThreadPoolExecutor(max_workers=16) as executor:
            results = list(executor.map(lambda _: cache.get(SCRIPT_PATH), range(32)))

        assert calls == [SCRIPT_PATH]
        assert all(r is results[0] for r in results)
        assert results[0].serializable_names == {"speed", "power"}
        assert cache.get_stats()["extractions"] == 1

    def test_distinct_paths_scanned_separately(self):
        extractor = MagicMock(side_effect=lambda p: _result(p))
        cache = DeclarationCache(extractor=extractor)
        cache.get("/a.cs")
        cache.get("/b.cs")
        assert extractor.call_count == 2
        assert cache.get_stats()["entries"] == 2

    def test_extractor_exception_becomes_failed_result(self):
        extractor = MagicMock(side_effect=RuntimeError("bad script"))
        cache = DeclarationCache(extractor=extractor)

        result = cache.get(SCRIPT_PATH)

        assert result.ok is False
        assert cache.fields(SCRIPT_PATH) is None
        assert cache.get_stats()["failures"] == 1
        extractor.assert_called_once()

    def test_default_extractor_scans_file(self, tmp_path):
        script = tmp_path / "Car.cs"
        script.write_text("public class Car { public float speed; }", encoding="utf-8")
        cache = DeclarationCache()
        assert cache.fields(str(script)) == {"speed"}


# ── Tests: Usage evaluator ───────────────────────────────────────────────


class TestUsageEvaluator:
    def test_declared_properties_mark_used(self):
        evaluator, _, registry = _evaluator(lambda p: _result(p, "speed", "power"))

        check = evaluator.evaluate(_reference("speed"))

        assert check.valid
        assert SCRIPT_PATH in registry

    def test_reserved_properties_ignored(self):
        evaluator, _, registry = _evaluator(lambda p: _result(p, "speed", "power"))
        check = evaluator.evaluate(_reference("speed", "m_Enabled", "m_EditorHideFlags"))
        assert check.valid
        assert SCRIPT_PATH in registry

    def test_one_undeclared_property_invalidates(self):
        evaluator, _, registry = _evaluator(lambda p: _result(p, "speed", "power"))

        check = evaluator.evaluate(_reference("speed", "turbo"))

        assert check.valid is False
        assert check.unmatched == ["turbo"]
        assert SCRIPT_PATH not in registry

    def test_no_properties_is_valid(self):
        evaluator, _, registry = _evaluator(lambda p: _result(p))
        assert evaluator.evaluate(_reference()).valid
        assert len(registry) == 1

    def test_later_invalid_reference_keeps_usage(self):
        evaluator, _, registry = _evaluator(lambda p: _result(p, "speed"))
        evaluator.evaluate(_reference("speed"))
        evaluator.evaluate(_reference("turbo"))
        assert SCRIPT_PATH in registry

    def test_unscannable_script_skipped(self):
        evaluator, _, registry = _evaluator(lambda p: _result(p, "speed", ok=False))

        check = evaluator.evaluate(_reference("speed"))

        assert check.valid is False
        assert check.skipped
        assert len(registry) == 0


# ── Tests: Usage registry ────────────────────────────────────────────────


class TestUsageRegistry:
    def test_add_is_idempotent(self):
        registry = UsageRegistry()
        assert registry.add("/a.cs") is True
        assert registry.add("/a.cs") is False
        assert len(registry) == 1
        assert registry.snapshot() == {"/a.cs"}

    def test_concurrent_adds(self):
        registry = UsageRegistry()
        with ThreadPoolExecutor(max_workers=8) as executor:
            list(executor.map(lambda i: registry.add(f"/{i % 10}.cs"), range(200)))
        assert len(registry) == 10


# ── Tests: Unused report ─────────────────────────────────────────────────


class TestUnusedReport:
    def test_lists_only_unused_once(self):
        registry = {"G1": "/p/Assets/A.cs", "G2": "/p/Assets/B.cs", "G3": "/p/Assets/C.cs"}
        usage = UsageRegistry()
        usage.add("/p/Assets/B.cs")
        usage.add("/p/Assets/B.cs")

        unused = find_unused_scripts(registry, usage)

        assert unused == [
            UnusedScript(guid="G1", path="/p/Assets/A.cs"),
            UnusedScript(guid="G3", path="/p/Assets/C.cs"),
        ]

    def test_deterministic_order(self):
        registry = {"Z": "/p/b.cs", "A": "/p/a.cs", "M": "/p/a.cs"}
        unused = find_unused_scripts(registry, UsageRegistry())
        assert [(u.path, u.guid) for u in unused] == [("/p/a.cs", "A"), ("/p/a.cs", "M"), ("/p/b.cs", "Z")]

    def test_write_report(self, tmp_path):
        root = tmp_path / "project"
        script = root / "Assets" / "A.cs"
        out = tmp_path / "UnusedScripts.csv"

        rows = write_unused_report(
            [UnusedScript(guid="G1", path=str(script)), UnusedScript(guid="G9", path="/elsewhere/X.cs")],
            str(out),
            project_root=str(root),
        )

        assert rows == 2
        assert out.read_text(encoding="utf-8").splitlines() == [
            REPORT_HEADER,
            "Assets/A.cs, G1",
            "/elsewhere/X.cs, G9",
        ]

    def test_empty_report_has_header(self, tmp_path):
        out = tmp_path / "UnusedScripts.csv"
        assert write_unused_report([], str(out)) == 0
        assert out.read_text(encoding="utf-8") == "Relative Path, GUID\n"
