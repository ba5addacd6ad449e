import pytest

from benchconductor.writers import FileWriter, is_valid_schema, new_writer


def test_file_writer_writes_and_closes(tmp_path):
    path = tmp_path / "out.txt"
    writer = FileWriter(str(path))
    assert writer.write(b"hello ") == 6
    assert writer.write(b"world") == 5
    writer.close()
    assert path.read_bytes() == b"hello world"


def test_file_writer_does_not_truncate(tmp_path):
    path = tmp_path / "out.txt"
    path.write_bytes(b"abcdef")
    with FileWriter(str(path)) as writer:
        writer.write(b"XY")
    assert path.read_bytes() == b"XYcdef"


def test_file_writer_stdout(capsysbinary):
    writer = FileWriter("-")
    payload = b"to stdout\n"
    assert writer.write(payload) == len(payload)
    writer.close()
    assert capsysbinary.readouterr().out == payload


def test_is_valid_schema():
    assert is_valid_schema("file") is True
    assert is_valid_schema("ftp") is False


def test_new_writer_file(tmp_path):
    path = tmp_path / "x.bin"
    writer = new_writer("file", str(path))
    writer.write(b"data")
    writer.close()
    assert path.read_bytes() == b"data"


def test_new_writer_unsupported(tmp_path):
    with pytest.raises(ValueError, match="unsupported output schema"):
        new_writer("ftp", str(tmp_path / "x"))


def test_file_writer_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        FileWriter(str(tmp_path / "missing" / "x"))