import pytest
from pydantic import ValidationError
from estatehub.core.exceptions import ValidationError as InputError
from estatehub.models.common import Pagination, is_blank, normalize_email, parse_pagination, validate_input
from estatehub.models.enquiry import EnquiryCreate, EnquiryStatus
from estatehub.models.property import (
    MediaHandle, PropertyCreate, PropertyFilter, PropertyStatus, PropertyUpdate, SortOption,
    parse_amenities, parse_featured
)


class TestAmenityParsing:
    """Test the accepted amenity input shapes"""

    def test_comma_delimited_string(self):
        assert parse_amenities("Gym, Pool ,, Parking") == ["Gym", "Pool", "Parking"]

    def test_json_array_string(self):
        assert parse_amenities('["Gym", " Pool ", ""]') == ["Gym", "Pool"]

    def test_list(self):
        assert parse_amenities(["Gym", None, "  ", "Lift"]) == ["Gym", "Lift"]

    def test_malformed_json_falls_back_to_commas(self):
        assert parse_amenities('[Gym, Pool') == ["[Gym", "Pool"]

    @pytest.mark.parametrize("value", [None, "", "   ", []])
    def test_empty(self, value):
        assert parse_amenities(value) == []


class TestPropertyInputs:
    """Test PropertyCreate/PropertyUpdate coercions and limits"""

    def valid_fields(self, **overrides):
        fields = {
            "title": "  Corner plot  ",
            "price": "3000000",
            "bhk": "3",
            "bathrooms": 2,
            "city": "Kochi",
            "area": 1500.5,
        }
        fields.update(overrides)
        return fields

    def test_create_coercions(self):
        listing = PropertyCreate(**self.valid_fields(amenities="A,B", featured="TRUE"))

        assert listing.title == "Corner plot"
        assert listing.price == 3000000
        assert listing.bhk == 3
        assert listing.area == "1500.5"
        assert listing.amenities == ["A", "B"]
        assert listing.featured is True
        assert listing.status == PropertyStatus.AVAILABLE

    @pytest.mark.parametrize("value,expected", [(True, True), ("true", True), ("yes", False), ("false", False), (1, False)])
    def test_featured(self, value, expected):
        assert parse_featured(value) is expected

    @pytest.mark.parametrize("field,value", [
        ("bhk", 0), ("bhk", 11), ("bathrooms", 11), ("price", -5),
        ("title", "x" * 201), ("status", "leased"), ("price", "inf"),
    ])
    def test_create_rejects(self, field, value):
        with pytest.raises(ValidationError):
            PropertyCreate(**self.valid_fields(**{field: value}))

    def test_description_limit(self):
        with pytest.raises(ValidationError):
            PropertyCreate(**self.valid_fields(description="d" * 2001))

    def test_update_only_sets_given_fields(self):
        patch = PropertyUpdate(price="10", status="rented")

        assert patch.model_dump(exclude_unset=True) == {"price": 10.0, "status": PropertyStatus.RENTED}

    def test_media_handle_wire_format(self):
        handle = MediaHandle(url="https://media.test/a.jpg", public_id="properties/images/a")

        assert handle.model_dump(by_alias=True) == {
            "url": "https://media.test/a.jpg", "publicId": "properties/images/a"
        }
        assert MediaHandle.model_validate({"url": "u", "publicId": "p"}).public_id == "p"


class TestPropertyFilter:
    def test_unknown_sort_defaults_to_newest(self):
        assert PropertyFilter(sort="cheapest").sort == SortOption.NEWEST
        assert PropertyFilter().sort == SortOption.NEWEST

    def test_known_sort(self):
        assert PropertyFilter(sort="price_desc").sort == SortOption.PRICE_DESC

    def test_non_numeric_price_is_input_error(self):
        with pytest.raises(InputError):
            validate_input(PropertyFilter, {"min_price": "cheap"})


class TestEnquiryInput:
    """Test enquiry field rules"""

    def valid_fields(self, **overrides):
        fields = {
            "name": "Meera",
            "email": " Meera@Example.COM ",
            "phone": "9123456780",
            "message": "Please call me",
            "property_id": "abc",
        }
        fields.update(overrides)
        return fields

    def test_valid(self):
        enquiry = EnquiryCreate(**self.valid_fields())

        assert enquiry.email == "meera@example.com"
        assert enquiry.phone == "9123456780"

    @pytest.mark.parametrize("phone", ["12345", "12345678901", "12345abcde", "91234 5678", "+919123456780"])
    def test_invalid_phone(self, phone):
        with pytest.raises(ValidationError):
            EnquiryCreate(**self.valid_fields(phone=phone))

    def test_message_limit(self):
        with pytest.raises(ValidationError):
            EnquiryCreate(**self.valid_fields(message="m" * 1001))

    def test_status_values(self):
        assert EnquiryStatus.values() == ["pending", "contacted", "closed"]

    def test_input_error_message(self):
        with pytest.raises(InputError) as exc_info:
            validate_input(EnquiryCreate, self.valid_fields(phone="12345"))

        assert exc_info.value.message.endswith("Please provide a valid 10-digit phone number")


class TestPagination:
    """Test lenient page/limit handling"""

    @pytest.mark.parametrize("page,limit,expected", [
        (None, None, (1, 10)),
        ("2", "5", (2, 5)),
        ("abc", "xyz", (1, 10)),
        ("0", "-1", (1, 10)),
        (" 3 ", "20", (3, 20)),
        ("2", "1000", (2, 100)),
        ("1000001", None, (1, 10)),
        ("99999999999999999999", "99999999999999999999", (1, 100)),
    ])
    def test_parse(self, page, limit, expected):
        pagination = parse_pagination(page, limit)
        assert (pagination.page, pagination.limit) == expected

    def test_offset_and_pages(self):
        pagination = Pagination(page=2, limit=10)

        assert pagination.offset == 10
        assert pagination.pages_for(15) == 2
        assert pagination.pages_for(0) == 0
        assert pagination.pages_for(20) == 2


class TestHelpers:
    @pytest.mark.parametrize("value,expected", [
        (None, True), ("", True), ("  ", True), ([], True), ("x", False), (0, False), (False, False),
    ])
    def test_is_blank(self, value, expected):
        assert is_blank(value) is expected

    def test_normalize_email(self):
        assert normalize_email(" A@B.io ") == "a@b.io"
        with pytest.raises(ValueError):
            normalize_email("missing-at.example.com")
