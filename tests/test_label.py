import pytest

from rkzoo.label import Label


@pytest.fixture
def label_file(tmp_path):
    path = tmp_path / "labels.txt"
    path.write_text("person\ncar\n\nbike\n", encoding="utf-8")
    return path


def test_load_skips_empty_lines(label_file):
    assert Label(label_file) == ["person", "car", "bike"]


def test_name_returns_loaded_entry(label_file):
    label = Label(label_file)
    assert label.name(1) == "car"


def test_name_falls_back_to_index_text(label_file):
    label = Label(label_file)
    assert label.name(10) == "10"
    assert label.name(-1) == "-1"


def test_empty_label_names_every_index():
    assert Label().name(0) == "0"


def test_reload_replaces_previous_names(label_file, tmp_path):
    label = Label(label_file)
    other = tmp_path / "other.txt"
    other.write_text("cat\r\ndog\r\n", encoding="utf-8")
    label.load(other)
    assert label == ["cat", "dog"]


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        Label(tmp_path / "missing.txt")