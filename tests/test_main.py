import logging
from pathlib import Path

from src import main as entry
from src.synth.wav_writer import read_wav_header


def test_main_writes_default_tone(tmp_path: Path):
    target = tmp_path / "audio.wav"
    assert entry.main(str(target)) == 0
    assert target.stat().st_size == 176_444
    assert read_wav_header(target).sample_count == 88_200


def test_main_reports_io_failure(tmp_path: Path, caplog):
    with caplog.at_level(logging.ERROR):
        code = entry.main(str(tmp_path / "missing/dir/audio.wav"))
    assert code == 1
    assert "Error:" in caplog.text
    assert not (tmp_path / "missing").exists()
