import pytest

from enumkit.types import (
    ParseArm,
    ParseArtifact,
    PropertyArtifact,
    MessageArtifact,
    SerializeArtifact,
    VariantTemplate,
    FieldDescriptor,
    VariantShape,
)


@pytest.fixture
def parse_artifact():
    return ParseArtifact(
        enum_name="Color",
        arms=[
            ParseArm(patterns=["red", "r"], template=VariantTemplate(variant="Red")),
            ParseArm(patterns=["blue"], template=VariantTemplate(variant="Blue")),
        ],
        default=VariantTemplate(
            variant="Other",
            shape=VariantShape.TUPLE,
            fields=[FieldDescriptor(type_hint="str")],
            capture=0,
        ),
    )


class TestParseArtifact:
    """
    Target: src/enumkit/types/artifacts.py (ParseArtifact)
    """

    def test_exact_match(self, parse_artifact):
        """TC-ART-001: 完全一致でアームを解決する"""
        match = parse_artifact.resolve("r")
        assert match.template.variant == "Red"
        assert match.captured is None

    def test_case_sensitive_without_trim(self, parse_artifact):
        """TC-ART-002: 大文字小文字を区別し、前後の空白をトリムしない"""
        # default が受け皿になるため、入力がそのまま捕捉される
        assert parse_artifact.resolve("RED").template.variant == "Other"
        assert parse_artifact.resolve(" red").captured == " red"

    def test_default_captures_input(self, parse_artifact):
        """TC-ART-003: マッチしない入力は default に捕捉される"""
        match = parse_artifact.resolve("purple")
        assert match.template.variant == "Other"
        assert match.template.capture == 0
        assert match.captured == "purple"

    def test_no_default_returns_none(self):
        """TC-ART-004: default が無い場合は None"""
        artifact = ParseArtifact(
            enum_name="Color",
            arms=[ParseArm(patterns=["red"], template=VariantTemplate(variant="Red"))],
        )
        assert artifact.resolve("green") is None
        assert artifact.resolve("") is None


class TestLookupArtifacts:
    """
    Target: src/enumkit/types/artifacts.py (Serialize / Message / Property)
    """

    def test_serialize_render(self):
        """TC-ART-005: 正準文字列の参照"""
        artifact = SerializeArtifact(enum_name="Color", table={"Red": "red"})
        assert artifact.render("Red") == "red"

    def test_message_lookup(self):
        """TC-ART-006: メッセージが無いバリアントは None"""
        artifact = MessageArtifact(
            enum_name="Color",
            messages={"Red": "Red"},
            detailed_messages={"Red": "This is very red"},
            serializations={"Red": ["red"], "Blue": ["Blue"]},
        )
        assert artifact.get_message("Red") == "Red"
        assert artifact.get_detailed_message("Red") == "This is very red"
        assert artifact.get_message("Blue") is None
        assert artifact.get_detailed_message("Blue") is None
        assert artifact.get_serializations("Blue") == ["Blue"]

    def test_serializations_are_copied(self):
        """TC-ART-007: 返却したリストの変更がテーブルに影響しないこと"""
        artifact = MessageArtifact(enum_name="Color", serializations={"Red": ["red"]})
        artifact.get_serializations("Red").append("x")
        assert artifact.get_serializations("Red") == ["red"]


class TestPropertyArtifact:
    """
    Target: src/enumkit/types/artifacts.py (PropertyArtifact)
    """

    @pytest.fixture
    def artifact(self):
        return PropertyArtifact(
            enum_name="Color",
            table={
                "Red": {
                    "Red": "255",
                    "Plus": "+7",
                    "Negative": "-1",
                    "Spaced": " 3",
                    "Max": str(2**64 - 1),
                    "Overflow": str(2**64),
                    "Flag": "true",
                    "Off": "false",
                    "Loud": "True",
                },
            },
        )

    def test_get_str(self, artifact):
        """TC-ART-008: 文字列取得"""
        assert artifact.get_str("Red", "Red") == "255"
        assert artifact.get_str("Red", "Missing") is None
        assert artifact.get_str("Blue", "Red") is None

    def test_get_int(self, artifact):
        """TC-ART-009: 符号なし整数として解釈できる場合のみ値を返す"""
        assert artifact.get_int("Red", "Red") == 255
        assert artifact.get_int("Red", "Plus") == 7
        assert artifact.get_int("Red", "Max") == 2**64 - 1

        assert artifact.get_int("Red", "Negative") is None
        assert artifact.get_int("Red", "Spaced") is None
        assert artifact.get_int("Red", "Overflow") is None
        assert artifact.get_int("Red", "Flag") is None
        assert artifact.get_int("Red", "Missing") is None

    def test_get_bool(self, artifact):
        """TC-ART-010: "true" / "false" のみを真偽値として解釈する"""
        assert artifact.get_bool("Red", "Flag") is True
        assert artifact.get_bool("Red", "Off") is False
        assert artifact.get_bool("Red", "Loud") is None
        assert artifact.get_bool("Red", "Red") is None
        assert artifact.get_bool("Blue", "Flag") is None
