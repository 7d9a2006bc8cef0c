import pytest
from fastapi.testclient import TestClient

from app.locations.models import City, Place, PlaceKind
from app.locations.service import LocationSearchService, get_location_service
from app.locations.store import StaticLocationStore


def make_city(id, name, region="Lagunes", **kwargs):
    return City(id=id, name=name, region=region, **kwargs)


def make_commune(id, name, **kwargs):
    return Place(id=id, name=name, kind=PlaceKind.COMMUNE, commune_name=name, **kwargs)


def make_neighborhood(id, name, commune, **kwargs):
    return Place(id=id, name=name, kind=PlaceKind.NEIGHBORHOOD, commune_name=commune, **kwargs)


@pytest.fixture
def cities():
    return [
        make_city("c1", "Abidjan", "Lagunes", latitude=5.36, longitude=-4.01),
        make_city("c2", "Bouaké", "Vallée du Bandama"),
        make_city("c3", "Yamoussoukro", "Lacs"),
        make_city("c4", "San-Pédro", "Bas-Sassandra"),
    ]


@pytest.fixture
def places():
    return [
        make_commune("p1", "Cocody", parent_city_id="c1"),
        make_commune("p2", "Yopougon", parent_city_id="c1"),
        make_commune("p3", "Yopougon", parent_city_id="c1"),
        make_neighborhood("p4", "Riviera", "Cocody", parent_city_id="c1"),
        make_neighborhood("p5", "Niangon", "Yopougon", parent_city_id="c1"),
        make_neighborhood("p6", "Ananeraie", "Yopougon", parent_city_id="c1"),
        make_neighborhood("p7", "Angré", "Cocody", parent_city_id="c1"),
    ]


@pytest.fixture
def store(cities, places):
    return StaticLocationStore(cities, places, property_counts={"c2": 3, "c1": 12})


@pytest.fixture
def service(store):
    return LocationSearchService(store)


@pytest.fixture
def client(service):
    from app.main import app

    app.dependency_overrides[get_location_service] = lambda: service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
