"""
Beach registry for Bahía de Banderas.

Each beach carries an exposure rating per swell sector (NW and SW), the
season in which it usually floods, and its zone along the bay.
Ratings come from local knowledge of how the bay's curvature and
Cabo Corrientes shelter each stretch of coast.
"""

import unicodedata
from dataclasses import dataclass
from enum import Enum


class Exposure(str, Enum):
    MUY_ALTA = 'MUY ALTA'
    ALTA = 'ALTA'
    MEDIA = 'MEDIA'
    BAJA = 'BAJA'


class Zone(str, Enum):
    SUR = 'SUR'
    CENTRO = 'CENTRO'
    NORTE = 'NORTE'


@dataclass(frozen=True)
class Beach:
    name: str
    lat: float
    lon: float
    exposure_nw: Exposure
    exposure_sw: Exposure
    risk_season: str
    zone: Zone

    def to_dict(self):
        return {
            'name': self.name,
            'lat': self.lat,
            'lon': self.lon,
            'exposure_nw': self.exposure_nw,
            'exposure_sw': self.exposure_sw,
            'risk_season': self.risk_season,
            'zone': self.zone,
        }


BEACHES = (
    Beach('Los Muertos', 20.6098, -105.2363, Exposure.MUY_ALTA, Exposure.BAJA, 'Invierno (Nov-Abr)', Zone.SUR),
    Beach('Olas Altas', 20.6120, -105.2380, Exposure.ALTA, Exposure.BAJA, 'Invierno (Nov-Abr)', Zone.SUR),
    Beach('Malecón', 20.6155, -105.2395, Exposure.ALTA, Exposure.BAJA, 'Invierno (Nov-Abr)', Zone.SUR),
    Beach('Camarones', 20.6290, -105.2380, Exposure.MEDIA, Exposure.MEDIA, 'Todo el año', Zone.CENTRO),
    Beach('Nuevo Vallarta', 20.7000, -105.2900, Exposure.BAJA, Exposure.ALTA, 'Verano (May-Oct)', Zone.NORTE),
    Beach('Bucerías', 20.7530, -105.3340, Exposure.BAJA, Exposure.MUY_ALTA, 'Verano (May-Oct)', Zone.NORTE),
    Beach('La Cruz', 20.7380, -105.3700, Exposure.BAJA, Exposure.ALTA, 'Verano (May-Oct)', Zone.NORTE),
    Beach('Sayulita', 20.8690, -105.4410, Exposure.ALTA, Exposure.ALTA, 'Todo el año', Zone.NORTE),
    Beach('Punta Mita', 20.7740, -105.5240, Exposure.MUY_ALTA, Exposure.ALTA, 'Todo el año', Zone.NORTE),
)

# Explanatory notes shown next to each exposure badge
EXPOSURE_NOTES = {
    'nw': {
        Exposure.MUY_ALTA: 'Playa muy expuesta al oleaje del Noroeste (Pacífico Norte/Bering). Mayor riesgo en invierno (Nov-Abr).',
        Exposure.ALTA: 'Playa expuesta al oleaje del Noroeste. Riesgo significativo en temporada invernal.',
        Exposure.MEDIA: 'Exposición moderada al oleaje del Noroeste.',
        Exposure.BAJA: 'Playa protegida del oleaje del Noroeste por la curvatura de la bahía.',
    },
    'sw': {
        Exposure.MUY_ALTA: 'Playa muy expuesta al oleaje del Suroeste (tormentas tropicales/huracanes). Mayor riesgo en verano (May-Oct).',
        Exposure.ALTA: 'Playa expuesta al oleaje del Suroeste. Riesgo significativo en temporada de lluvias.',
        Exposure.MEDIA: 'Exposición moderada al oleaje del Suroeste.',
        Exposure.BAJA: 'Playa protegida del oleaje del Suroeste por Cabo Corrientes.',
    },
}


def _fold(text):
    """Lower-case and strip accents so 'malecon' matches 'Malecón'."""
    decomposed = unicodedata.normalize('NFKD', text)
    return ''.join(c for c in decomposed if not unicodedata.combining(c)).casefold().strip()


def find_beach(name, beaches=BEACHES):
    """
    Look up a beach by name, ignoring case and accents.

    Returns:
    --------
    beach : Beach or None
    """
    key = _fold(name)
    for beach in beaches:
        if _fold(beach.name) == key:
            return beach
    return None


def exposure_notes(beach):
    """Return the NW/SW exposure notes for a beach."""
    return {
        'nw': EXPOSURE_NOTES['nw'][beach.exposure_nw],
        'sw': EXPOSURE_NOTES['sw'][beach.exposure_sw],
    }
