"""Tests for compiler diagnostic parsing and remapping."""

from __future__ import annotations

from glowc.features.templating import Diagnostic, LineMap, LineMapper, parse_diagnostics, remap_diagnostics


def test_parse_common_diagnostic_forms() -> None:
    text = "\n".join(
        [
            "Effects_Generated/Fire.shader:80:5: error: undeclared identifier 'foo'",
            "Fire.shader(81,12): warning X3206: implicit truncation",
            "Shader error in 'Glow/Fire': syntax error at line 82 (on d3d11)",
            "",
            "compilation aborted",
        ]
    )

    assert parse_diagnostics(text) == [
        Diagnostic(80, "error: undeclared identifier 'foo'"),
        Diagnostic(81, "warning X3206: implicit truncation"),
        Diagnostic(82, "Shader error in 'Glow/Fire': syntax error"),
        Diagnostic(0, "compilation aborted"),
    ]


def test_remap_translates_through_line_map() -> None:
    mapper = LineMapper(LineMap(73, 3, 5))
    diagnostics = [Diagnostic(80, "boom"), Diagnostic(10, "template"), Diagnostic(0, "no line")]

    remapped = remap_diagnostics(diagnostics, mapper)

    assert remapped == [Diagnostic(9, "boom"), Diagnostic(0, "template"), Diagnostic(0, "no line")]


def test_format_includes_line_only_when_known() -> None:
    assert Diagnostic(9, "boom").format("Effects/Fire.glow") == "Effects/Fire.glow:9: boom"
    assert Diagnostic(0, "boom").format("Effects/Fire.glow") == "Effects/Fire.glow: boom"
