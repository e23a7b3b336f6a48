"""
Integration Tests for the Generation Pipeline
=============================================

Tests the full workflow from a generator options document to TypeScript
files on disk.
"""

import json

import pytest

from prisma_zod_mock.core.dmmf.parser import DMMFParseError
from prisma_zod_mock.generator import OutputPathError, generate, generate_from_file, load_options
from prisma_zod_mock.core.codegen.renderer import FILE_HEADER

from tests.utils.assertions import assert_balanced_braces
from tests.utils.data_generators import DMMFDataGenerator


def relative_paths(written, root):
    return sorted(str(p.relative_to(root)).replace("\\", "/") for p in written)


class TestGenerate:
    """Test generate() with in-memory options."""

    @pytest.mark.asyncio
    async def test_single_file_output(self, temp_dir):
        options = DMMFDataGenerator.build_options(output=str(temp_dir))
        written = await generate(options)

        assert relative_paths(written, temp_dir) == ["index.ts"]
        content = (temp_dir / "index.ts").read_text(encoding="utf-8")
        assert content.startswith(FILE_HEADER)
        assert "export const UserSchema = z.object({" in content
        assert "export const createPostMockBatch = (" in content
        assert_balanced_braces(content)

    @pytest.mark.asyncio
    async def test_multiple_files_output(self, temp_dir):
        options = DMMFDataGenerator.build_options(
            output=str(temp_dir), config={"useMultipleFiles": "true", "mockSeed": "42"}
        )
        written = await generate(options)

        assert relative_paths(written, temp_dir) == [
            "index.ts",
            "mocks/post.mock.ts", "mocks/profile.mock.ts", "mocks/user.mock.ts",
            "schemas/enums.ts",
            "schemas/post.ts", "schemas/profile.ts", "schemas/user.ts",
        ]
        for path in written:
            assert_balanced_braces(path.read_text(encoding="utf-8"))
        assert "faker.seed(42);" in (temp_dir / "mocks" / "user.mock.ts").read_text(encoding="utf-8")

    @pytest.mark.asyncio
    async def test_creates_missing_output_dir(self, temp_dir):
        target = temp_dir / "nested" / "generated"
        options = DMMFDataGenerator.build_options(output=str(target))
        await generate(options)
        assert (target / "index.ts").exists()

    @pytest.mark.asyncio
    async def test_model_depths(self, temp_dir):
        options = DMMFDataGenerator.build_options(
            output=str(temp_dir),
            config={"modelDepths": json.dumps({"User": 1}), "relationMaxDepth": "2"},
        )
        await generate(options)
        content = (temp_dir / "index.ts").read_text(encoding="utf-8")
        assert "export const createUserMock = (overrides?: Partial<User>, depth: number = 0, maxDepth: number = 1): User => {" in content
        assert "export const createPostMock = (overrides?: Partial<Post>, depth: number = 0, maxDepth: number = 2): Post => {" in content

    @pytest.mark.asyncio
    async def test_invalid_config_values_fall_back(self, temp_dir):
        options = DMMFDataGenerator.build_options(
            output=str(temp_dir), config={"createZodSchemas": "maybe", "mockSeed": "abc"}
        )
        await generate(options)
        content = (temp_dir / "index.ts").read_text(encoding="utf-8")
        assert "UserSchema" in content
        assert "faker.seed" not in content

    @pytest.mark.asyncio
    async def test_missing_output(self):
        options = DMMFDataGenerator.build_options(output=None)
        with pytest.raises(OutputPathError, match="No output was specified"):
            await generate(options)

    @pytest.mark.asyncio
    async def test_regeneration_overwrites(self, temp_dir):
        (temp_dir / "index.ts").write_text("stale", encoding="utf-8")
        await generate(DMMFDataGenerator.build_options(output=str(temp_dir)))
        assert "stale" not in (temp_dir / "index.ts").read_text(encoding="utf-8")


class TestGenerateFromFile:
    """Test generate_from_file() with documents on disk."""

    @pytest.mark.asyncio
    async def test_json_document(self, temp_dir):
        source = temp_dir / "options.json"
        output = temp_dir / "out"
        source.write_text(
            DMMFDataGenerator.to_json(DMMFDataGenerator.generate_generator_options(output=str(output))),
            encoding="utf-8",
        )
        written = await generate_from_file(source)
        assert written == [output.resolve() / "index.ts"]

    @pytest.mark.asyncio
    async def test_yaml_document_with_output_override(self, temp_dir, blog_datamodel_data):
        source = temp_dir / "schema.yaml"
        source.write_text(DMMFDataGenerator.to_yaml({"datamodel": blog_datamodel_data}), encoding="utf-8")

        written = await generate_from_file(source, output=temp_dir / "override", parser_type="yaml")
        assert (temp_dir / "override" / "index.ts").exists()
        assert len(written) == 1

    @pytest.mark.asyncio
    async def test_bare_datamodel_without_output(self, temp_dir, blog_datamodel_data):
        source = temp_dir / "datamodel.json"
        source.write_text(DMMFDataGenerator.to_json(blog_datamodel_data), encoding="utf-8")
        with pytest.raises(OutputPathError):
            await generate_from_file(source)

    @pytest.mark.asyncio
    async def test_invalid_document(self, temp_dir):
        source = temp_dir / "broken.json"
        source.write_text('{"models": [{"name": "User"}]}', encoding="utf-8")
        with pytest.raises(DMMFParseError, match="fields"):
            await generate_from_file(source, output=temp_dir / "out")
        assert not (temp_dir / "out").exists()

    @pytest.mark.asyncio
    async def test_missing_file(self, temp_dir):
        with pytest.raises(FileNotFoundError):
            await generate_from_file(temp_dir / "absent.json", output=temp_dir)


class TestLoadOptions:
    """Test reading options documents without generating."""

    @pytest.mark.asyncio
    async def test_loads_yaml(self, temp_dir, blog_datamodel_data):
        source = temp_dir / "schema.yaml"
        source.write_text(DMMFDataGenerator.to_yaml(blog_datamodel_data), encoding="utf-8")

        options = await load_options(source)
        assert [m.name for m in options.datamodel.models] == ["User", "Post", "Profile"]
        assert options.generator.output is None

    @pytest.mark.asyncio
    async def test_invalid_document(self, temp_dir):
        source = temp_dir / "broken.yaml"
        source.write_text("models: [unclosed", encoding="utf-8")
        with pytest.raises(DMMFParseError, match="Invalid YAML syntax"):
            await load_options(source, "yaml")
