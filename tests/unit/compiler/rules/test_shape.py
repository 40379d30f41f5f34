import pytest

from enumkit.compiler.rules import shape
from enumkit.compiler.exceptions import EnumCompilationError
from enumkit.types import EnumDescriptor, ErrorKind, FieldDescriptor, VariantDescriptor, VariantShape


def _enum(*variants):
    return EnumDescriptor(name="Color", variants=[VariantDescriptor(name="Red", serializations=["Red"]), *variants])


def _default(shape_=VariantShape.TUPLE, fields=None):
    return VariantDescriptor(
        name="Other",
        shape=shape_,
        fields=fields if fields is not None else [FieldDescriptor(type_hint="str")],
        serializations=["Other"],
        is_default=True,
    )


class TestShapeRule:
    """
    Target: src/enumkit/compiler/rules/shape.py
    """

    def test_tc_shape_001_valid_default(self):
        """
        TC-SHAPE-001: 文字列型の単一フィールドを持つ tuple 形式は許可
        """
        shape.validate(_enum(_default()))
        shape.validate(_enum(_default(fields=[FieldDescriptor(type_hint="Path")])))
        shape.validate(_enum(_default(fields=[FieldDescriptor(type_hint="Name", from_str=True)])))

    @pytest.mark.parametrize("shape_, fields", [
        (VariantShape.UNIT, []),
        (VariantShape.TUPLE, [FieldDescriptor(type_hint="str"), FieldDescriptor(type_hint="str")]),
        (VariantShape.STRUCT, [FieldDescriptor(name="text", type_hint="str")]),
        (VariantShape.TUPLE, [FieldDescriptor(type_hint="int")]),
    ])
    def test_tc_shape_002_invalid_default(self, shape_, fields):
        """
        TC-SHAPE-002: 条件を満たさない default はエラー
        """
        with pytest.raises(EnumCompilationError) as exc_info:
            shape.validate(_enum(_default(shape_, fields)))

        assert exc_info.value.kind == ErrorKind.INVALID_DEFAULT_VARIANT_SHAPE
        assert exc_info.value.stage == "ShapeRule"

    def test_tc_shape_003_non_default_is_unconstrained(self):
        """
        TC-SHAPE-003: default 以外のバリアントの形状は制約しない
        """
        shape.validate(_enum(VariantDescriptor(
            name="Green",
            shape=VariantShape.STRUCT,
            fields=[FieldDescriptor(name="range", type_hint="int")],
            serializations=["Green"],
        )))

    def test_tc_shape_004_require_fabricable(self):
        """
        TC-SHAPE-004: 非所有参照を持つフィールドは中立値を作れない
        """
        borrowed = VariantDescriptor(
            name="Slice",
            shape=VariantShape.TUPLE,
            fields=[FieldDescriptor(type_hint="memoryview", borrowed=True)],
            serializations=["Slice"],
        )
        with pytest.raises(EnumCompilationError) as exc_info:
            shape.require_fabricable(_enum(borrowed), stage="IterationGenerator")

        assert exc_info.value.kind == ErrorKind.UNBOUNDED_LIFETIME_NOT_SUPPORTED
        assert exc_info.value.stage == "IterationGenerator"
        assert "Slice" in exc_info.value.message

        # 所有型のみであれば問題なし
        shape.require_fabricable(_enum(_default()))

    def test_tc_shape_005_require_neutral(self):
        """
        TC-SHAPE-005: 引数なしで構築できないフィールドは中立値で埋められない
        """
        dated = VariantDescriptor(
            name="At",
            shape=VariantShape.TUPLE,
            fields=[FieldDescriptor(type_hint="date", neutral=False)],
            serializations=["At"],
        )
        with pytest.raises(EnumCompilationError) as exc_info:
            shape.require_neutral(_enum(dated), stage="IterationGenerator")

        assert exc_info.value.kind == ErrorKind.MISSING_NEUTRAL_VALUE
        assert exc_info.value.stage == "IterationGenerator"
        assert "'At'" in exc_info.value.message

        with pytest.raises(EnumCompilationError):
            shape.require_neutral(_enum(dated), for_parse=True)

    def test_tc_shape_006_require_neutral_for_parse_skips_unmatched_fields(self):
        """
        TC-SHAPE-006: parse では無効化バリアントと default の捕捉フィールドは対象外
        """
        disabled = VariantDescriptor(
            name="At",
            shape=VariantShape.TUPLE,
            fields=[FieldDescriptor(type_hint="date", neutral=False)],
            serializations=["At"],
            is_disabled=True,
        )
        captured = _default(fields=[FieldDescriptor(type_hint="Name", from_str=True, neutral=False)])

        shape.require_neutral(_enum(disabled, captured), for_parse=True)

        # iteration では全バリアントの全フィールドが対象
        with pytest.raises(EnumCompilationError):
            shape.require_neutral(_enum(disabled))
