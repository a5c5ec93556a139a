import pytest

from dentalbook.catalog import get_procedure_price, get_total_price, time_slot_sort_key, TIME_SLOTS
from dentalbook.shared.validators import (
    is_valid_booking_email,
    is_valid_phone,
    normalize_date_string,
    validate_email,
    validate_phone,
)


class TestPhone:
    @pytest.mark.parametrize("phone", ["09171234567", "0917-123-4567", "0917 123 4567"])
    def test_accepts_eleven_digits_starting_with_09(self, phone):
        assert is_valid_phone(phone)

    @pytest.mark.parametrize("phone", ["", None, "0917123456", "091712345678", "19171234567", "abc"])
    def test_rejects_everything_else(self, phone):
        assert not is_valid_phone(phone)

    def test_validate_phone_returns_digits(self):
        assert validate_phone("0917-123-4567") == "09171234567"

    def test_validate_phone_explains_failure(self):
        with pytest.raises(ValueError, match="exactly 11 digits"):
            validate_phone("0917")
        with pytest.raises(ValueError, match="start with 09"):
            validate_phone("19171234567")


class TestEmail:
    @pytest.mark.parametrize("email", ["ana@gmail.com", "j.cruz+1@yahoo.com", "x_y@hotmail.com"])
    def test_booking_email_accepts_consumer_domains(self, email):
        assert is_valid_booking_email(email)

    @pytest.mark.parametrize("email", ["ana@outlook.com", "ana@gmail.co", "ana@gmail.com.ph", "", None])
    def test_booking_email_rejects_other_domains(self, email):
        assert not is_valid_booking_email(email)

    def test_validate_email_lowercases(self):
        assert validate_email(" Ana@Clinic.PH ") == "ana@clinic.ph"

    def test_validate_email_rejects_garbage(self):
        with pytest.raises(ValueError):
            validate_email("not-an-email")


class TestNormalizeDate:
    def test_strips_time_and_pads(self):
        assert normalize_date_string("2025-6-5") == "2025-06-05"
        assert normalize_date_string("2025-06-05T00:00:00.000Z") == "2025-06-05"

    @pytest.mark.parametrize("value", ["", None, "2025-02-30", "June 5"])
    def test_invalid_dates_raise(self, value):
        with pytest.raises(ValueError):
            normalize_date_string(value)


class TestCatalog:
    def test_price_lookup(self):
        assert get_procedure_price("Root Canal") == 8000
        assert get_procedure_price("Teleportation") == 0

    def test_total_price_multiplies_recurring(self):
        class Row:
            price = 2500
            is_recurring = True
            occurrences = 4

        assert get_total_price(Row()) == 10000
        Row.is_recurring = False
        assert get_total_price(Row()) == 2500

    def test_time_slots_sort_chronologically(self):
        shuffled = ["1:00 PM", "9:30 AM", "11:30 AM", "9:00 AM", "4:30 PM"]
        assert sorted(shuffled, key=time_slot_sort_key) == [
            "9:00 AM",
            "9:30 AM",
            "11:30 AM",
            "1:00 PM",
            "4:30 PM",
        ]
        assert sorted(TIME_SLOTS, key=time_slot_sort_key) == TIME_SLOTS
