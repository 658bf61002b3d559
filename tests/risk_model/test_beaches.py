from dataclasses import FrozenInstanceError

import pytest

from marejada.risk_model import beaches
from marejada.risk_model.beaches import BEACHES, Exposure, Zone


def test_registry_has_nine_beaches_with_unique_names():
    assert len(BEACHES) == 9
    assert len({b.name for b in BEACHES}) == 9


def test_registry_entries_are_immutable():
    with pytest.raises(FrozenInstanceError):
        BEACHES[0].exposure_nw = Exposure.BAJA


def test_every_beach_has_closed_exposure_and_zone():
    for beach in BEACHES:
        assert isinstance(beach.exposure_nw, Exposure)
        assert isinstance(beach.exposure_sw, Exposure)
        assert isinstance(beach.zone, Zone)


def test_southern_beaches_face_nw_swell():
    muertos = beaches.find_beach('Los Muertos')
    assert muertos.exposure_nw is Exposure.MUY_ALTA
    assert muertos.exposure_sw is Exposure.BAJA
    assert muertos.zone is Zone.SUR


@pytest.mark.parametrize('query', ['Malecón', 'malecon', ' MALECON '])
def test_find_beach_ignores_case_and_accents(query):
    assert beaches.find_beach(query).name == 'Malecón'


def test_find_beach_unknown():
    assert beaches.find_beach('Yelapa') is None


def test_exposure_notes_follow_ratings():
    bucerias = beaches.find_beach('Bucerias')
    notes = beaches.exposure_notes(bucerias)
    assert 'protegida' in notes['nw']
    assert 'huracanes' in notes['sw']


def test_to_dict_keeps_enum_values():
    entry = BEACHES[0].to_dict()
    assert entry['name'] == 'Los Muertos'
    assert entry['exposure_nw'] == 'MUY ALTA'
    assert entry['zone'] == 'SUR'
