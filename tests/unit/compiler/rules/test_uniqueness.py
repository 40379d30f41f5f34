import pytest

from enumkit.compiler.rules import uniqueness
from enumkit.compiler.exceptions import EnumCompilationError
from enumkit.types import EnumDescriptor, ErrorKind, FieldDescriptor, VariantDescriptor, VariantShape


def _enum(*variants):
    return EnumDescriptor(name="Color", variants=list(variants))


def _v(name, *serializations, **kwargs):
    return VariantDescriptor(name=name, serializations=list(serializations) or [name], **kwargs)


def _default(name):
    return VariantDescriptor(
        name=name,
        shape=VariantShape.TUPLE,
        fields=[FieldDescriptor(type_hint="str")],
        serializations=[name],
        is_default=True,
    )


class TestUniquenessRule:
    """
    Target: src/enumkit/compiler/rules/uniqueness.py
    列挙型全体にまたがる一意性制約
    """

    def test_tc_uniq_001_valid(self):
        """
        TC-UNIQ-001: 制約違反が無い場合は何もしない
        """
        uniqueness.validate(_enum(_v("Red", "red", "r"), _v("Blue", "blue"), _default("Other")))

    def test_tc_uniq_002_duplicate_serialization(self):
        """
        TC-UNIQ-002: 2つのバリアントが同じ文字列でマッチする場合はエラー
        """
        with pytest.raises(EnumCompilationError) as exc_info:
            uniqueness.validate(_enum(_v("Red", "red", "x"), _v("Crimson", "crimson", "x")))

        err = exc_info.value
        assert err.kind == ErrorKind.DUPLICATE_SERIALIZATION
        assert err.stage == "UniquenessRule"
        assert "'x'" in err.message
        assert "'Red'" in err.message and "'Crimson'" in err.message

    def test_tc_uniq_003_name_vs_serialization(self):
        """
        TC-UNIQ-003: 暗黙のバリアント名と他バリアントの serialize が衝突する場合もエラー
        """
        with pytest.raises(EnumCompilationError) as exc_info:
            uniqueness.validate(_enum(_v("Red"), _v("Crimson", "Red")))
        assert exc_info.value.kind == ErrorKind.DUPLICATE_SERIALIZATION

    def test_tc_uniq_004_disabled_is_ignored(self):
        """
        TC-UNIQ-004: 無効化されたバリアントは衝突判定の対象外
        """
        uniqueness.validate(_enum(_v("Red", "red"), _v("OldRed", "red", is_disabled=True)))

    def test_tc_uniq_005_multiple_defaults(self):
        """
        TC-UNIQ-005: default バリアントが2つ以上ある場合はエラー
        """
        with pytest.raises(EnumCompilationError) as exc_info:
            uniqueness.validate(_enum(_v("Red"), _default("Other"), _default("Unknown")))

        assert exc_info.value.kind == ErrorKind.MULTIPLE_DEFAULT_VARIANTS
        assert "Can't have multiple default variants" in str(exc_info.value)

    def test_tc_uniq_006_disabled_defaults_still_count(self):
        """
        TC-UNIQ-006: 無効化された default も個数に数える
        """
        disabled_default = _default("Unknown").model_copy(update={"is_disabled": True})
        with pytest.raises(EnumCompilationError) as exc_info:
            uniqueness.validate(_enum(_default("Other"), disabled_default))
        assert exc_info.value.kind == ErrorKind.MULTIPLE_DEFAULT_VARIANTS

    def test_tc_uniq_007_duplicate_variant_name(self):
        """
        TC-UNIQ-007: 同名のバリアント
        """
        with pytest.raises(EnumCompilationError) as exc_info:
            uniqueness.validate(_enum(_v("Red", "a"), _v("Red", "b")))
        assert exc_info.value.kind == ErrorKind.DUPLICATE_VARIANT_NAME
