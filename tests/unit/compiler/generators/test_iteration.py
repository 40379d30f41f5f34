import pytest

from enumkit.compiler.generators import iteration
from enumkit.compiler.exceptions import EnumCompilationError
from enumkit.types import EnumDescriptor, ErrorKind, FieldDescriptor, VariantDescriptor, VariantShape


class TestIterationGenerator:
    """
    Target: src/enumkit/compiler/generators/iteration.py
    """

    def test_tc_iter_001_all_variants_in_order(self):
        """
        TC-ITER-001: 無効化されたものを含む全バリアントを宣言順に列挙する
        """
        desc = EnumDescriptor(
            name="Color",
            variants=[
                VariantDescriptor(name="Red", serializations=["Red"]),
                VariantDescriptor(name="Yellow", serializations=["Yellow"], is_disabled=True),
                VariantDescriptor(
                    name="Blue",
                    shape=VariantShape.TUPLE,
                    fields=[FieldDescriptor(type_hint="int")],
                    serializations=["Blue"],
                ),
            ],
        )
        artifact = iteration.generate(desc)

        assert artifact.iterator_name == "ColorIter"
        assert [t.variant for t in artifact.items] == ["Red", "Yellow", "Blue"]
        assert artifact.items[2].fields[0].type_hint == "int"
        # 中立値で埋めるため、入力文字列を受け取る位置は無い
        assert all(t.capture is None for t in artifact.items)

    def test_tc_iter_002_borrowed_field(self):
        """
        TC-ITER-002: 非所有参照を持つ列挙型の iteration は生成できない
        """
        desc = EnumDescriptor(
            name="Token",
            variants=[
                VariantDescriptor(
                    name="Slice",
                    shape=VariantShape.STRUCT,
                    fields=[FieldDescriptor(name="data", type_hint="memoryview", borrowed=True)],
                    serializations=["Slice"],
                ),
            ],
        )
        with pytest.raises(EnumCompilationError) as exc_info:
            iteration.generate(desc)

        assert exc_info.value.kind == ErrorKind.UNBOUNDED_LIFETIME_NOT_SUPPORTED
        assert exc_info.value.stage == "IterationGenerator"
        assert "field 'data'" in exc_info.value.message
