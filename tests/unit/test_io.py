"""Unit tests for the library and stroke I/O layer.

Tests for LibraryReader, LibraryWriter, stroke files and converter functions.
"""

import json
from pathlib import Path

import pytest

from strokematch.config import EncoderConfig
from strokematch.core.encoder import ShapeEncoder, encode
from strokematch.core.library import EMPTY_ENTRY_NAME, MatchLibrary, ScoreWeights
from strokematch.domain import Point
from strokematch.exceptions import (
    LibraryFormatError,
    LibraryLoadError,
    LibrarySaveError,
    StrokeLoadError,
)
from strokematch.io import LibraryReader, LibraryWriter, read_stroke, write_stroke
from strokematch.io.converter import (
    FORMAT_VERSION,
    library_from_dict,
    library_to_dict,
    points_from_data,
    points_to_data,
)


def _zigzag() -> list[Point]:
    return [Point(float(x), float((x // 20) % 2) * 60.0) for x in range(0, 201, 10)]


@pytest.fixture
def library():
    lib = MatchLibrary("letters", precision=4, weights=ScoreWeights(grid=2.0, vertical=0.5))
    lib.add("zigzag", encode(_zigzag(), 4))
    lib.add("dot", encode([Point(10.0, 10.0)], 4))
    return lib


class TestPointConversion:
    """Tests for stroke document conversion."""

    def test_pairs(self):
        """[x, y] pairs become points."""
        assert points_from_data([[1, 2], [3.5, -4]]) == [Point(1.0, 2.0), Point(3.5, -4.0)]

    def test_objects(self):
        """{"x", "y"} objects become points."""
        assert points_from_data([{"x": 1, "y": 2}]) == [Point(1.0, 2.0)]

    def test_empty_stroke(self):
        """An empty array is an empty stroke."""
        assert points_from_data([]) == []

    @pytest.mark.parametrize(
        "data",
        [
            {"x": 1, "y": 2},
            [[1, 2, 3]],
            [{"x": 1}],
            ["12"],
        ],
    )
    def test_invalid_documents(self, data):
        """Anything but a list of points is rejected."""
        with pytest.raises(ValueError):
            points_from_data(data)

    def test_points_to_data(self):
        """Points are written as [x, y] pairs."""
        assert points_to_data([Point(1.0, 2.0)]) == [[1.0, 2.0]]


class TestLibraryConversion:
    """Tests for library document conversion."""

    def test_document_layout(self, library):
        """The document carries name, precision, weights and entries."""
        data = library_to_dict(library)

        assert data["format_version"] == FORMAT_VERSION
        assert data["name"] == "letters"
        assert data["precision"] == 4
        assert data["weights"]["grid"] == 2.0
        assert [e["name"] for e in data["entries"]] == [EMPTY_ENTRY_NAME, "zigzag", "dot"]

    def test_round_trip(self, library):
        """A library survives conversion unchanged."""
        restored = library_from_dict(json.loads(json.dumps(library_to_dict(library))))

        assert restored.name == library.name
        assert restored.precision == library.precision
        assert restored.weights == library.weights
        assert restored.entries == library.entries

    def test_points_only_entry_encoded(self):
        """Entries stored as points are encoded at the library precision."""
        data = {
            "name": "raw",
            "precision": 3,
            "entries": [{"name": "line", "points": [[0, 0], [100, 0]]}],
        }
        lib = library_from_dict(data)

        assert lib.get("line").shape == encode([Point(0.0, 0.0), Point(100.0, 0.0)], 3)

    def test_foreign_precision_reencoded(self, library):
        """Entries at another precision are re-encoded from their points."""
        data = library_to_dict(library)
        data["precision"] = 6

        lib = library_from_dict(data)

        assert all(entry.shape.precision == 6 for entry in lib)
        assert lib.get("zigzag").shape == encode(_zigzag(), 6)

    def test_missing_empty_restored_first(self, library):
        """The Empty entry is restored, first, when the document lacks it."""
        data = library_to_dict(library)
        data["entries"] = [e for e in data["entries"] if e["name"] != EMPTY_ENTRY_NAME]

        lib = library_from_dict(data)

        assert lib.names == [EMPTY_ENTRY_NAME, "zigzag", "dot"]

    def test_encoder_config_used(self):
        """The given encoder's minimum sizes are applied."""
        encoder = ShapeEncoder(EncoderConfig(min_width=5.0, min_height=5.0))
        data = {"name": "n", "precision": 3, "entries": [{"name": "dot", "points": [[1, 1]]}]}

        lib = library_from_dict(data, encoder)

        assert lib.get("dot").shape == encoder.encode([Point(1.0, 1.0)], 3)

    def test_unknown_version(self, library):
        """Future format versions are rejected."""
        data = library_to_dict(library)
        data["format_version"] = FORMAT_VERSION + 1
        with pytest.raises(ValueError, match="format version"):
            library_from_dict(data)

    def test_entry_without_shape_or_points(self):
        """An entry needs a shape or points."""
        data = {"name": "n", "precision": 3, "entries": [{"name": "broken"}]}
        with pytest.raises(ValueError, match="neither"):
            library_from_dict(data)

    def test_missing_precision(self):
        """The precision field is required."""
        with pytest.raises(KeyError):
            library_from_dict({"name": "n"})

    @pytest.mark.parametrize(
        "field, value",
        [
            ("grid_map", [[0.0] * 4] * 3),
            ("grid_map", [[0.0] * 3] * 4),
            ("circle_map_by_mass", [[0.0] * 4] * 5),
            ("circle_map_by_median", [[0.0] * 3] * 4),
            ("flat_map_horizontal", [0, 1, 0]),
            ("flat_map_vertical", [0] * 17),
        ],
    )
    def test_map_size_mismatch(self, library, field, value):
        """Stored maps that do not fit the precision are rejected."""
        data = library_to_dict(library)
        data["entries"][1]["shape"][field] = value
        with pytest.raises(ValueError, match=field):
            library_from_dict(data)


class TestStrokeFiles:
    """Tests for reading and writing stroke files."""

    def test_round_trip(self, tmp_path: Path):
        """A written stroke reads back unchanged."""
        path = tmp_path / "stroke.json"
        write_stroke(path, _zigzag())
        assert read_stroke(path) == _zigzag()

    def test_missing_file(self, tmp_path: Path):
        """A missing stroke file raises StrokeLoadError."""
        with pytest.raises(StrokeLoadError):
            read_stroke(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path: Path):
        """Malformed JSON raises StrokeLoadError."""
        path = tmp_path / "bad.json"
        path.write_text("[[1, 2", encoding="utf-8")
        with pytest.raises(StrokeLoadError):
            read_stroke(path)

    def test_not_a_point_list(self, tmp_path: Path):
        """A JSON document that is not a point list raises StrokeLoadError."""
        path = tmp_path / "object.json"
        path.write_text('{"points": []}', encoding="utf-8")
        with pytest.raises(StrokeLoadError) as exc_info:
            read_stroke(path)
        assert exc_info.value.path == str(path)


class TestLibraryReader:
    """Tests for LibraryReader class."""

    def test_library_before_load(self, tmp_path: Path):
        """Accessing the library before loading raises RuntimeError."""
        reader = LibraryReader(tmp_path / "lib.json")
        with pytest.raises(RuntimeError, match="Library not loaded"):
            _ = reader.library

    def test_load_nonexistent_file(self, tmp_path: Path):
        """Loading a missing file raises LibraryLoadError."""
        reader = LibraryReader(tmp_path / "missing.json")
        with pytest.raises(LibraryLoadError, match="file not found"):
            reader.load()

    def test_load_invalid_json(self, tmp_path: Path):
        """Malformed JSON raises LibraryFormatError."""
        path = tmp_path / "lib.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(LibraryFormatError):
            LibraryReader(path).load()

    def test_load_invalid_document(self, tmp_path: Path):
        """A document without required fields raises LibraryFormatError."""
        path = tmp_path / "lib.json"
        path.write_text('{"name": "x"}', encoding="utf-8")
        with pytest.raises(LibraryFormatError):
            LibraryReader(path).load()

    def test_load_truncated_map(self, tmp_path: Path, library):
        """A stored map cut short raises LibraryFormatError instead of loading."""
        data = library_to_dict(library)
        data["entries"][1]["shape"]["flat_map_horizontal"] = [0, 1, 0]
        path = tmp_path / "lib.json"
        path.write_text(json.dumps(data), encoding="utf-8")

        with pytest.raises(LibraryFormatError, match="flat_map_horizontal"):
            LibraryReader(path).load()

    def test_load_negative_weight(self, tmp_path: Path):
        """A negative stored weight raises LibraryFormatError."""
        path = tmp_path / "lib.json"
        path.write_text(
            json.dumps({"name": "x", "precision": 3, "weights": {"grid": -1.0}}),
            encoding="utf-8",
        )
        with pytest.raises(LibraryFormatError):
            LibraryReader(path).load()

    def test_context_manager(self, tmp_path: Path, library):
        """The reader loads on entry and forgets the library on exit."""
        path = tmp_path / "lib.json"
        LibraryWriter(library, path).save()

        with LibraryReader(path) as reader:
            assert reader.library.names == library.names

        with pytest.raises(RuntimeError):
            _ = reader.library


class TestLibraryWriter:
    """Tests for LibraryWriter class."""

    def test_save_and_load(self, tmp_path: Path, library):
        """A saved library loads back equal."""
        path = tmp_path / "lib.json"
        LibraryWriter(library, path).save()

        reader = LibraryReader(path)
        reader.load()
        loaded = reader.library

        assert loaded.name == library.name
        assert loaded.weights == library.weights
        assert loaded.entries == library.entries

    def test_creates_parent_directories(self, tmp_path: Path, library):
        """Missing parent directories are created."""
        path = tmp_path / "nested" / "dir" / "lib.json"
        LibraryWriter(library, path).save()
        assert path.exists()

    def test_no_temporary_file_left(self, tmp_path: Path, library):
        """Only the target file remains after saving."""
        path = tmp_path / "lib.json"
        LibraryWriter(library, path).save()
        assert [p.name for p in tmp_path.iterdir()] == ["lib.json"]

    def test_overwrites_existing(self, tmp_path: Path, library):
        """Saving again replaces the previous document."""
        path = tmp_path / "lib.json"
        LibraryWriter(library, path).save()

        library.remove("dot")
        LibraryWriter(library, path).save()

        data = json.loads(path.read_text(encoding="utf-8"))
        assert [e["name"] for e in data["entries"]] == [EMPTY_ENTRY_NAME, "zigzag"]

    def test_save_error(self, tmp_path: Path, library):
        """An unwritable target raises LibrarySaveError."""
        # A file where the parent directory should be
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        with pytest.raises(LibrarySaveError):
            LibraryWriter(library, blocker / "lib.json").save()

    def test_failed_replace_removes_temporary_file(self, tmp_path: Path, library):
        """A failed save does not leave the temporary file behind."""
        # A directory cannot be replaced by a file
        target = tmp_path / "lib.json"
        target.mkdir()
        with pytest.raises(LibrarySaveError):
            LibraryWriter(library, target).save()
        assert [p.name for p in tmp_path.iterdir()] == ["lib.json"]
