from typing import Mapping, Optional

# Map hexagon labels for the London boroughs
BOROUGH_LABELS = {
    'KING': 'Kingston upon Thames',
    'CROY': 'Croydon',
    'BROM': 'Bromley',
    'HOUN': 'Hounslow',
    'EALI': 'Ealing',
    'HAVE': 'Havering',
    'HILL': 'Hillingdon',
    'HRRW': 'Harrow',
    'BREN': 'Brent',
    'BARN': 'Barnet',
    'ENFI': 'Enfield',
    'WALT': 'Waltham Forest',
    'REDB': 'Redbridge',
    'SUTT': 'Sutton',
    'LAMB': 'Lambeth',
    'STHW': 'Southwark',
    'LEWS': 'Lewisham',
    'GWCH': 'Greenwich',
    'BEXL': 'Bexley',
    'RICH': 'Richmond upon Thames',
    'MERT': 'Merton',
    'WAND': 'Wandsworth',
    'HAMM': 'Hammersmith and Fulham',
    'KENS': 'Kensington and Chelsea',
    'CITY': 'City of London',
    'WSTM': 'Westminster',
    'CAMD': 'Camden',
    'TOWH': 'Tower Hamlets',
    'ISLI': 'Islington',
    'HACK': 'Hackney',
    'HRGY': 'Haringey',
    'NEWH': 'Newham',
    'BARK': 'Barking and Dagenham',
}

MAX_OPACITY = 0.75


def borough_label_to_name(label: Optional[str]) -> Optional[str]:
    """Full borough name for a map label, or None if it isn't a borough."""
    if label is None:
        return None
    return BOROUGH_LABELS.get(label)


def borough_shading(counts: Mapping[str, int], borough: str, max_opacity: float = MAX_OPACITY) -> float:
    """
    Opacity for a borough on the map: its share of the busiest borough's
    listings, scaled up to `max_opacity`.
    """
    if not counts:
        return 0.0
    highest = max(counts.values())
    if highest <= 0:
        return 0.0
    return counts.get(borough, 0) / highest * max_opacity
