"""
Summary: Verify line classification into properties, body code and skipped lines.
Why: Anchoring keeps sampling calls that mention _Textures inside the body.
"""

from __future__ import annotations

import pytest

from glowc.features.templating.domain import (
    BodyLine,
    PrimitiveType,
    PropertyKind,
    PropertyLine,
    SkipLine,
    classify_line,
    classify_source,
    parse_property,
)


@pytest.mark.parametrize(
    ("line", "name", "kind", "primitive"),
    [
        ('_Speed ("Speed", Float) = 2.5', "_Speed", PropertyKind.FLOAT, PrimitiveType.SCALAR),
        ('  _Intensity ("Intensity", Range(0,5)) = 1', "_Intensity", PropertyKind.RANGE, PrimitiveType.SCALAR),
        ('_Color ("Color", Color) = (1,0.6,0.2,1)', "_Color", PropertyKind.COLOR, PrimitiveType.VECTOR4),
        ('_Offset ("Offset", Vector) = (0,0,0,0)', "_Offset", PropertyKind.VECTOR, PrimitiveType.VECTOR4),
        ('_Steps ("Steps", Int) = 4', "_Steps", PropertyKind.INT, PrimitiveType.INTEGER),
        ('_Mask ("Mask", 2D) = "white" {}', "_Mask", PropertyKind.TEXTURE_2D, PrimitiveType.TEXTURE),
        ('_Sky ("Sky", CUBE) = "" {}', "_Sky", PropertyKind.TEXTURE_CUBE, PrimitiveType.TEXTURE),
    ],
)
def test_parse_property_kinds(line: str, name: str, kind: PropertyKind, primitive: PrimitiveType) -> None:
    declaration = parse_property(line)

    assert declaration is not None
    assert declaration.name == name
    assert declaration.kind is kind
    assert declaration.mapped_primitive_type is primitive
    assert declaration.raw_declaration_text == line.strip()


def test_sampling_call_is_not_a_property() -> None:
    line = "    float4 c = SAMPLE_TEXTURE2D(_ScanTex, sampler_ScanTex, uv);"

    assert parse_property(line) is None
    assert classify_line(line) == BodyLine(line)


def test_unknown_kind_falls_back_to_scalar() -> None:
    declaration = parse_property('_Blend ("Blend", Gradient) = 0')

    assert declaration is not None
    assert declaration.kind is None
    assert declaration.declared_kind == "Gradient"
    assert declaration.primitive_lines() == ("float _Blend;",)


def test_texture_emits_binding_and_sampler() -> None:
    declaration = parse_property('_Noise ("Noise", 3D) = "" {}')

    assert declaration is not None
    assert declaration.primitive_lines() == ("TEXTURE3D(_Noise);", "SAMPLER(sampler_Noise);")


def test_classify_source_skips_blank_and_comment_lines() -> None:
    source = '// header\n\n_Speed ("Speed", Float) = 2\r\nfloat4 EffectMain() { return 0; }'

    classified = classify_source(source)

    assert isinstance(classified[0], SkipLine)
    assert isinstance(classified[1], SkipLine)
    assert isinstance(classified[2], PropertyLine)
    assert classified[3] == BodyLine("float4 EffectMain() { return 0; }")
    assert len(classified) == 4
