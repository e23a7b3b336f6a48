"""
Integration Tests for the Command Line Interface
================================================

Tests the generate, mock and analyze subcommands end to end.
"""

import json
from datetime import datetime
from decimal import Decimal

import pytest

from prisma_zod_mock.cli import build_parser, main, to_jsonable

from tests.utils.data_generators import DMMFDataGenerator


@pytest.fixture
def options_file(temp_dir):
    """Generator options document on disk, writing to temp_dir/out."""
    path = temp_dir / "options.json"
    doc = DMMFDataGenerator.generate_generator_options(output=str(temp_dir / "out"))
    path.write_text(DMMFDataGenerator.to_json(doc), encoding="utf-8")
    return path


class TestGenerateCommand:
    """Test `generate`."""

    def test_writes_files(self, options_file, temp_dir, capsys):
        assert main(["generate", str(options_file)]) == 0
        assert (temp_dir / "out" / "index.ts").exists()
        assert "index.ts" in capsys.readouterr().out

    def test_output_override(self, options_file, temp_dir):
        assert main(["generate", str(options_file), "-o", str(temp_dir / "other")]) == 0
        assert (temp_dir / "other" / "index.ts").exists()

    def test_missing_file(self, temp_dir):
        assert main(["generate", str(temp_dir / "absent.json")]) == 1

    def test_invalid_document(self, temp_dir):
        path = temp_dir / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        assert main(["generate", str(path), "--format", "json"]) == 1

    def test_missing_output(self, temp_dir, blog_datamodel_data):
        path = temp_dir / "datamodel.json"
        path.write_text(DMMFDataGenerator.to_json(blog_datamodel_data), encoding="utf-8")
        assert main(["generate", str(path)]) == 1


class TestMockCommand:
    """Test `mock`."""

    def test_prints_json_instances(self, options_file, capsys):
        assert main(["mock", str(options_file), "User", "-n", "3", "--seed", "1", "--depth", "0"]) == 0
        mocks = json.loads(capsys.readouterr().out)
        assert len(mocks) == 3
        assert {m["role"] for m in mocks} <= {"USER", "ADMIN"}
        assert all(m["posts"] == [] for m in mocks)

    def test_seed_is_reproducible(self, options_file, capsys):
        main(["mock", str(options_file), "Profile", "--seed", "7"])
        first = json.loads(capsys.readouterr().out)[0]
        main(["mock", str(options_file), "Profile", "--seed", "7"])
        second = json.loads(capsys.readouterr().out)[0]
        assert first["id"] == second["id"]
        assert first["avatarUrl"] == second["avatarUrl"]

    def test_datetimes_are_serialized(self, options_file, capsys):
        assert main(["mock", str(options_file), "Post", "--depth", "1"]) == 0
        post = json.loads(capsys.readouterr().out)[0]
        assert isinstance(post["author"]["id"], str)

    def test_unknown_model(self, options_file):
        assert main(["mock", str(options_file), "Ghost"]) == 1


class TestAnalyzeCommand:
    """Test `analyze`."""

    def test_prints_semantic_types(self, capsys):
        assert main(["analyze", "userEmail", "avatarUrl", "foo"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines == ["userEmail\temail", "avatarUrl\timage", "foo\tunknown"]


class TestParser:
    """Test argument parsing."""

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_mock_defaults(self):
        args = build_parser().parse_args(["mock", "doc.json", "User"])
        assert args.count == 1
        assert args.seed is None
        assert args.depth is None


class TestToJsonable:
    """Test JSON conversion of mock values."""

    def test_conversions(self):
        assert to_jsonable(datetime(2024, 1, 2, 3, 4, 5)) == "2024-01-02T03:04:05"
        assert to_jsonable(Decimal("9.99")) == "9.99"
        assert to_jsonable(b"\x00\x01") == "AAE="

    def test_unsupported(self):
        with pytest.raises(TypeError):
            to_jsonable(object())


class TestMockCommandFieldShapes:
    """Test `mock` on list, unsupported and invalid fields."""

    def write_document(self, temp_dir, fields):
        path = temp_dir / "thing.json"
        model = DMMFDataGenerator.model("Thing", [
            DMMFDataGenerator.field("id", "Int", isId=True), *fields
        ])
        path.write_text(DMMFDataGenerator.to_json({"models": [model]}), encoding="utf-8")
        return path

    def test_list_and_unsupported_fields(self, temp_dir, capsys):
        path = self.write_document(temp_dir, [
            DMMFDataGenerator.field("tags", isList=True),
            DMMFDataGenerator.field("geo", "Geometry"),
        ])
        assert main(["mock", str(path), "Thing", "--seed", "3"]) == 0
        thing = json.loads(capsys.readouterr().out)[0]
        assert isinstance(thing["tags"], list)
        assert thing["geo"] is None

    def test_inverted_range_exits_with_error(self, temp_dir):
        path = self.write_document(temp_dir, [
            DMMFDataGenerator.field("qty", "Int", documentation="@mock.range(10, 1)"),
        ])
        assert main(["mock", str(path), "Thing"]) == 1
