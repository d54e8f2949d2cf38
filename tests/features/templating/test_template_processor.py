"""Tests for source validation and template expansion."""

from __future__ import annotations

import logging

import pytest
from pytest_mock import MockerFixture

from glowc.features.templating import (
    EffectTemplate,
    GeneratedUnit,
    GenerationFailure,
    LineMap,
    LineMapper,
    TemplateProcessor,
    ValidationIssue,
    validate_source,
)

MULTI_PROPERTY_EFFECT = "\n".join(
    [
        '_Color ("Color", Color) = (1,1,1,1)',
        '_Mask ("Mask", 2D) = "white" {}',
        "",
        "float4 EffectMain()",
        "{",
        "    return _Color * SAMPLE_TEXTURE2D(_Mask, sampler_Mask, GetUV());",
        "}",
    ]
)


@pytest.fixture
def processor(small_template_text: str) -> TemplateProcessor:
    return TemplateProcessor(EffectTemplate.from_text(small_template_text))


@pytest.mark.parametrize(
    ("source", "issue"),
    [
        ("", ValidationIssue.EMPTY_SOURCE),
        ("   \n\t\n", ValidationIssue.EMPTY_SOURCE),
        ("float4 Main() { return 0; }", ValidationIssue.MISSING_ENTRY_FUNCTION),
        ("float4 Main() { return 0;", ValidationIssue.MISSING_ENTRY_FUNCTION),
        ("float4 EffectMain() { return 0;", ValidationIssue.UNBALANCED_BRACES),
        ("float4 EffectMain() } return 0; {", ValidationIssue.UNBALANCED_BRACES),
    ],
)
def test_validate_reports_structural_issues(source: str, issue: ValidationIssue) -> None:
    result = validate_source(source)

    assert not result.ok
    assert result.issue is issue
    assert result.reason == issue.value


def test_validate_accepts_well_formed_source(simple_effect: str) -> None:
    assert validate_source(simple_effect).ok


def test_generate_single_property_example(processor: TemplateProcessor, simple_effect: str) -> None:
    unit = processor.generate(simple_effect, "Speedy")

    assert isinstance(unit, GeneratedUnit)
    assert [prop.name for prop in unit.properties] == ["_Speed"]
    assert unit.body_text == "float4 EffectMain(){ return 0; }"

    lines = unit.output_text.splitlines()
    assert lines[0] == 'Shader "Glow/Speedy"'
    assert lines[4] == '        _Speed ("Speed", Float) = 2.5'
    assert lines[7] == "            float _Speed;"
    assert lines[8] == "float4 EffectMain(){ return 0; }"
    assert unit.line_map == LineMap(
        body_start_line_in_output=8,
        declaration_line_count=1,
        entry_function_start_line_in_source=2,
    )


def test_generate_preserves_property_order_and_expands_textures(processor: TemplateProcessor) -> None:
    unit = processor.generate(MULTI_PROPERTY_EFFECT, "Masked")

    assert isinstance(unit, GeneratedUnit)
    lines = unit.output_text.splitlines()
    assert lines[4:6] == [
        '        _Color ("Color", Color) = (1,1,1,1)',
        '        _Mask ("Mask", 2D) = "white" {}',
    ]
    assert lines[8:11] == [
        "            float4 _Color;",
        "            TEXTURE2D(_Mask);",
        "            SAMPLER(sampler_Mask);",
    ]
    assert lines[11] == "float4 EffectMain()"
    assert unit.line_map.body_start_line_in_output == 9
    assert unit.line_map.declaration_line_count == 3
    assert unit.line_map.entry_function_start_line_in_source == 4


def test_generated_boundary_maps_to_entry_line(processor: TemplateProcessor) -> None:
    unit = processor.generate(MULTI_PROPERTY_EFFECT, "Masked")
    assert isinstance(unit, GeneratedUnit)
    line_map = unit.line_map
    mapper = LineMapper(line_map)

    boundary = line_map.body_start_line_in_output + line_map.declaration_line_count
    assert mapper.translate(boundary) == line_map.entry_function_start_line_in_source
    assert unit.output_text.splitlines()[boundary - 1] == "float4 EffectMain()"
    # Output line of the return statement maps back to source line 6.
    assert mapper.translate(boundary + 2) == 6


def test_generate_without_properties_has_no_blank_gap(processor: TemplateProcessor) -> None:
    unit = processor.generate("float4 EffectMain() { return 1; }", "Plain")

    assert isinstance(unit, GeneratedUnit)
    lines = unit.output_text.splitlines()
    assert lines[7] == "float4 EffectMain() { return 1; }"
    assert unit.line_map.declaration_line_count == 0
    assert LineMapper(unit.line_map).translate(8) == 1


def test_generate_is_byte_reproducible(processor: TemplateProcessor) -> None:
    first = processor.generate(MULTI_PROPERTY_EFFECT, "Masked")
    second = processor.generate(MULTI_PROPERTY_EFFECT, "Masked")

    assert isinstance(first, GeneratedUnit) and isinstance(second, GeneratedUnit)
    assert first.output_text == second.output_text


def test_generate_refuses_invalid_source(processor: TemplateProcessor, mocker: MockerFixture) -> None:
    spy = mocker.spy(processor.renderer, "render")

    result = processor.generate("float4 EffectMain() {", "Broken")

    assert result == GenerationFailure("unbalanced braces")
    spy.assert_not_called()


def test_generate_warns_on_unknown_kind(
    processor: TemplateProcessor, caplog: pytest.LogCaptureFixture
) -> None:
    source = '_Blend ("Blend", Gradient) = 0\nfloat4 EffectMain() { return _Blend; }'

    with caplog.at_level(logging.WARNING, logger="glowc"):
        unit = processor.generate(source, "Odd")

    assert isinstance(unit, GeneratedUnit)
    assert "            float _Blend;" in unit.output_text.splitlines()
    assert any("Gradient" in record.getMessage() for record in caplog.records)


def test_generate_rejects_blank_effect_name(processor: TemplateProcessor, simple_effect: str) -> None:
    assert isinstance(processor.generate(simple_effect, "  "), GenerationFailure)
