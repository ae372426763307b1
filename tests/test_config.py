import pytest
from miditone.config import PlaybackOptions, load_options


def test_defaults_are_valid():
    opts = PlaybackOptions().validate()
    assert opts.delta_ms == 1.0 and opts.speed == 1.0 and opts.track == 0
    assert opts.from_note is None and opts.until_note is None and not opts.quiet


@pytest.mark.parametrize("kw", [
    {"delta_ms": 0}, {"delta_ms": -2.0}, {"speed": 0.0}, {"track": -1}, {"from_note": -3},
])
def test_invalid(kw):
    with pytest.raises(ValueError):
        PlaybackOptions(**kw).validate()


def test_merged_ignores_none():
    opts = PlaybackOptions(speed=2.0).merged(speed=None, track=3)
    assert opts.speed == 2.0 and opts.track == 3


def test_load_yaml(tmp_path, capsys):
    p = tmp_path / "opts.yml"
    p.write_text("delta_ms: 2.5\nspeed: 1.5\nfrom_note: 4\nvolume: 11\n", encoding="utf-8")
    data = load_options(str(p))
    assert data == {"delta_ms": 2.5, "speed": 1.5, "from_note": 4}
    assert "volume" in capsys.readouterr().out


def test_load_missing_or_bad(tmp_path):
    assert load_options(str(tmp_path / "nope.yml")) == {}
    bad = tmp_path / "list.yml"
    bad.write_text("- 1\n- 2\n", encoding="utf-8")
    assert load_options(str(bad)) == {}
    empty = tmp_path / "empty.yml"
    empty.write_text("", encoding="utf-8")
    assert load_options(str(empty)) == {}
