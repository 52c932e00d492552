from map_links.routes import full_route_url, route_url, unique_place_titles
from map_links.staticmap import direction_map_url, format_coordinate, stop_image_url
from tour_server.schemas import PlaceReference


def _refs(*titles):
    return [PlaceReference(title=title) for title in titles]


def test_no_places_no_route():
    assert route_url([]) is None
    assert full_route_url([]) is None


def test_single_place_is_search_url():
    assert route_url(["A"]) == "https://www.google.com/maps/search/?api=1&query=A"


def test_two_places_have_no_waypoints():
    url = route_url(["A", "B"])
    assert url == "https://www.google.com/maps/dir/?api=1&origin=A&destination=B&travelmode=walking"
    assert "waypoints" not in url


def test_duplicates_removed_in_first_seen_order():
    refs = _refs("A", "B", "C", "B")
    assert unique_place_titles(refs) == ["A", "B", "C"]
    assert full_route_url(refs) == (
        "https://www.google.com/maps/dir/?api=1&origin=A&destination=C&waypoints=B&travelmode=walking"
    )


def test_waypoints_are_pipe_delimited_and_encoded():
    url = route_url(["Start", "Café de Flore", "St. Mary's", "End"])
    assert "&waypoints=Caf%C3%A9%20de%20Flore|St.%20Mary's&" in url


def test_titles_compared_exactly():
    refs = _refs("Museum", "museum", "Museum ", None)
    assert unique_place_titles(refs) == ["Museum", "museum", "Museum "]


def test_stop_image_url_format():
    assert stop_image_url("maps-key", 48.8584, 2.2945) == (
        "https://maps.googleapis.com/maps/api/staticmap?center=48.8584,2.2945&zoom=17&size=800x450"
        "&markers=color:red%7C48.8584,2.2945&key=maps-key"
    )


def test_direction_map_url_format():
    assert direction_map_url("maps-key", (48.85, 2.29), (48.86, 2.33)) == (
        "https://maps.googleapis.com/maps/api/staticmap?size=800x450"
        "&path=color:0x0000ff%7Cweight:5%7C48.85,2.29%7C48.86,2.33"
        "&markers=color:blue%7Clabel:A%7C48.85,2.29"
        "&markers=color:green%7Clabel:B%7C48.86,2.33&key=maps-key"
    )


def test_static_map_urls_are_stable():
    assert stop_image_url("k", 1.5, -2.5) == stop_image_url("k", 1.5, -2.5)
    assert direction_map_url("k", (1.5, 2.5), (3.5, 4.5)) == direction_map_url("k", (1.5, 2.5), (3.5, 4.5))


def test_small_coordinates_are_plain_decimals():
    url = stop_image_url("k", 51.4779, -0.00005)
    assert "center=51.4779,-0.00005&" in url
    assert "e-05" not in url
    assert format_coordinate(1e-7) == "0.0000001"
    assert format_coordinate(48.8584) == "48.8584"
