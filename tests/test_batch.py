from imageguard.batch import collect_inputs, run_batch
from imageguard.pipeline import RunConfig


def test_collect_inputs_filters_by_extension(tmp_path):
    for name in ("b.png", "a.JPG", "notes.txt"):
        (tmp_path / name).write_bytes(b"")
    found = collect_inputs(str(tmp_path))
    assert [p.rsplit("/", 1)[-1] for p in found] == ["a.JPG", "b.png"]
    assert collect_inputs(str(tmp_path / "*.png")) == [str(tmp_path / "b.png")]


def test_undecodable_inputs_are_reported(tmp_path):
    bad = tmp_path / "broken.png"
    bad.write_bytes(b"\x00\x01 definitely not an image")
    out_dir = tmp_path / "out"
    done, failed = run_batch([str(bad)], str(out_dir), RunConfig(), workers=1)
    assert done == []
    assert list(failed) == [str(bad)]
    assert out_dir.is_dir()
    assert not any(out_dir.iterdir())


def test_empty_batch(tmp_path):
    done, failed = run_batch([], str(tmp_path / "out"), RunConfig())
    assert (done, failed) == ([], {})
