"""Reference lists offered by the visit form."""

from typing import Dict, List

OTHER = "Other"

COMPLAINT_OPTIONS: List[str] = [
    "Joint hemarthrosis",
    "Intracranial hemorrhage",
    "Iliopsoas hematoma",
    "Hematemesis",
    "Melena",
    "Gum bleeding",
    "Tooth extraction",
    "Tongue bleeding",
    "Epistaxis",
    "Hematuria",
    "Crush injury/RTA",
    "Hemorrhagic cyst",
    "Menorrhagia",
    "Subconjunctival bleeding",
    "Orbital hematoma",
    "Preoperative preparation/intervention",
    "Labour",
    "Circumcision",
    OTHER,
]

# Treatment centers per state
STATE_CENTERS: Dict[str, List[str]] = {
    "Khartoum": [
        "Khartoum Teaching Hospital",
        "Omdurman Hospital",
        "Bahri Hospital",
        "Ibn Sina Hospital",
        "Royal Care Hospital",
    ],
    "Al Jazirah": ["Wad Madani Teaching Hospital", "Al Managil Hospital"],
    "White Nile": ["Rabak Hospital", "Kosti Hospital"],
    "Blue Nile": ["Ad-Damazin Hospital"],
    "Northern": ["Dongola Hospital", "Merowe Hospital"],
    "River Nile": ["Atbara Teaching Hospital", "Shendi Hospital"],
    "Red Sea": ["Port Sudan Teaching Hospital"],
    "Kassala": ["Kassala Teaching Hospital"],
    "Al Qadarif": ["Al Qadarif Hospital"],
    "Sennar": ["Sennar Hospital"],
    "North Kordofan": ["El Obeid Teaching Hospital"],
    "South Kordofan": ["Kadugli Hospital"],
    "West Kordofan": ["El Fula Hospital"],
    "Central Darfur": ["Zalingei Hospital"],
    "North Darfur": ["El Fasher Hospital"],
    "South Darfur": ["Nyala Teaching Hospital"],
    "East Darfur": ["Ed Daein Hospital"],
    "West Darfur": ["El Geneina Hospital"],
}


def centers_for(state: str) -> List[str]:
    """Centers of a state; empty for an unset or unknown state."""
    if not state:
        return []
    return list(STATE_CENTERS.get(state, []))
