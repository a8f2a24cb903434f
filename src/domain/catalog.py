from __future__ import annotations

# Built-in medicine catalog; its order is the row order of exported sheets.
MEDICINES: tuple[str, ...] = (
    "Amoxicillin",
    "Amoxicillin + Clavulanate",
    "Cephalexin",
    "Doxycycline",
    "Enrofloxacin",
    "Metronidazole",
    "Meloxicam",
    "Carprofen",
    "Dipyrone",
    "Tramadol",
    "Gabapentin",
    "Prednisolone",
    "Dexamethasone",
    "Omeprazole",
    "Ondansetron",
    "Maropitant",
    "Furosemide",
    "Ivermectin",
    "Fenbendazole",
    "Insulin",
    "Ringer Lactate",
    "Saline 0.9%",
)

VETS_DEFAULT: tuple[str, ...] = ("Isadora", "Thalles")
