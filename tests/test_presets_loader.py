import json

from nbody.presets_loader import TEMPLATES_DIR, list_templates, load_template


def _write(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")


def test_shipped_templates_load():
    items = list_templates()
    assert items
    for fn, display in items:
        bodies, scale, name = load_template(fn, TEMPLATES_DIR)
        assert bodies
        assert name == display
        assert scale is None or scale > 0


def test_skips_malformed_bodies(tmp_path):
    _write(tmp_path / "scene.json", {
        "name": "Scene",
        "scale": "120",
        "bodies": [
            {"name": "ok", "mass": 2, "position": [1, 2], "velocity": [0, 0.5], "color": [300, -5, 10]},
            {"name": "no mass", "position": [0, 0], "velocity": [0, 0]},
            {"name": "zero", "mass": 0, "position": [0, 0], "velocity": [0, 0]},
            {"name": "short", "mass": 1, "position": [0], "velocity": [0, 0]},
            {"mass": 1, "position": [3, 3], "velocity": ["x", 0]},
        ],
    })
    bodies, scale, name = load_template("scene.json", str(tmp_path))
    assert name == "Scene"
    assert scale == 120.0
    assert len(bodies) == 1
    assert bodies[0].color == (255, 0, 10)
    assert bodies[0].position == (1.0, 2.0)


def test_missing_or_broken_file_is_empty(tmp_path):
    (tmp_path / "broken.json").write_text("{not json", encoding="utf-8")
    assert load_template("broken.json", str(tmp_path)) == ([], None, "broken")
    assert load_template("absent.json", str(tmp_path)) == ([], None, "absent")


def test_list_templates_uses_display_names(tmp_path):
    _write(tmp_path / "b.json", {"name": "Bravo", "bodies": []})
    _write(tmp_path / "a.json", {"bodies": []})
    (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")
    assert list_templates(str(tmp_path)) == [("a.json", "a"), ("b.json", "Bravo")]
    assert list_templates(str(tmp_path / "nope")) == []
