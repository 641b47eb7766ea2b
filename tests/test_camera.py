from nbody.camera import Camera2D
from nbody.constants import MAX_PIXELS_PER_UNIT


def test_origin_maps_to_viewport_center():
    cam = Camera2D(scale=100.0)
    cam.set_viewport_size(800, 600)
    assert cam.world_to_screen((0.0, 0.0)) == (400, 300)
    assert cam.world_to_screen((1.0, -1.0)) == (500, 200)


def test_screen_world_round_trip_within_a_pixel():
    cam = Camera2D(scale=150.0)
    cam.set_viewport_size(1000, 800)
    cam.pan_pixels(37, -12)
    p = (0.731, -1.25)
    back = cam.screen_to_world(cam.world_to_screen(p))
    assert abs(back[0] - p[0]) <= 1.0 / cam.scale
    assert abs(back[1] - p[1]) <= 1.0 / cam.scale


def test_zoom_keeps_pivot_fixed_and_clamps():
    cam = Camera2D(scale=100.0)
    cam.set_viewport_size(800, 600)
    pivot = (650, 120)
    before = cam.screen_to_world(pivot)
    cam.zoom(2.0, pivot)
    after = cam.screen_to_world(pivot)
    assert cam.scale == 200.0
    assert abs(before[0] - after[0]) < 1e-9 and abs(before[1] - after[1]) < 1e-9
    for _ in range(50):
        cam.zoom(10.0)
    assert cam.scale == MAX_PIXELS_PER_UNIT


def test_reset_recenters():
    cam = Camera2D()
    cam.pan_pixels(100, 100)
    cam.reset(250.0)
    assert cam.center == [0.0, 0.0]
    assert cam.scale == 250.0
