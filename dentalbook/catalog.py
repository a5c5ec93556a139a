"""Static clinic catalog - procedures, prices, time slots and patient limits"""

from datetime import datetime

PROCEDURE_TYPES = [
    {"name": "Cleaning", "price": 2500},
    {"name": "Filling", "price": 3500},
    {"name": "Root Canal", "price": 8000},
    {"name": "Extraction", "price": 2000},
    {"name": "Crown", "price": 15000},
    {"name": "Whitening", "price": 5000},
    {"name": "Braces Consultation", "price": 1500},
    {"name": "Oral Surgery", "price": 12000},
]

TIME_SLOTS = [
    "9:00 AM",
    "9:30 AM",
    "10:00 AM",
    "10:30 AM",
    "11:00 AM",
    "11:30 AM",
    "1:00 PM",
    "1:30 PM",
    "2:00 PM",
    "2:30 PM",
    "3:00 PM",
    "3:30 PM",
    "4:00 PM",
    "4:30 PM",
]

RECURRING_PATTERNS = ["weekly", "bi-weekly", "monthly"]
MAX_OCCURRENCES = 52

PATIENT_SEXES = ["male", "female"]
MAX_PATIENT_AGE = 100


def get_procedure_price(procedure_type: str) -> int:
    """Price of a procedure from the price list, 0 when unknown"""
    for procedure in PROCEDURE_TYPES:
        if procedure["name"] == procedure_type:
            return procedure["price"]
    return 0


def is_known_procedure(procedure_type: str) -> bool:
    return any(p["name"] == procedure_type for p in PROCEDURE_TYPES)


def get_total_price(appointment) -> int:
    base_price = appointment.price or 0
    if appointment.is_recurring and appointment.occurrences and appointment.occurrences > 1:
        return base_price * appointment.occurrences
    return base_price


def time_slot_sort_key(slot: str):
    """Chronological key for slot labels like '1:30 PM'; unknown labels sort last"""
    try:
        return datetime.strptime(slot.strip(), "%I:%M %p").time().isoformat()
    except (ValueError, AttributeError):
        return "99"
