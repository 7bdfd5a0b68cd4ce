import logging
from typing import Optional

from django.db import models

logger = logging.getLogger(__name__)


class VehicleCategory(models.TextChoices):
    """Categories of cargo a quotation line can describe."""

    CAR = "car", "Car"
    SUV = "suv", "SUV"
    SMALL_VAN = "small_van", "Small van"
    BIG_VAN = "big_van", "Big van"
    VAN = "van", "Van"
    TRUCK = "truck", "Truck"
    TRUCKHEAD = "truckhead", "Truckhead"
    TRUCK_CHASSIS = "truck_chassis", "Truck chassis"
    TRAILER = "trailer", "Trailer"
    BUS = "bus", "Bus"
    TANK_TRUCK = "tank_truck", "Tank truck"
    HIGH_AND_HEAVY = "high_and_heavy", "High and heavy"
    RORO = "roro", "RoRo"
    OTHER = "other", "Other"


VEHICLE_CATEGORY_SYNONYMS = {
    "smallvan": VehicleCategory.SMALL_VAN,
    "bigvan": VehicleCategory.BIG_VAN,
    "truck_head": VehicleCategory.TRUCKHEAD,
    "tractor": VehicleCategory.TRUCKHEAD,
    "tractor_unit": VehicleCategory.TRUCKHEAD,
    "semi_trailer": VehicleCategory.TRAILER,
    "flatrack": VehicleCategory.TRAILER,
}


def normalise_vehicle_category(
    value: Optional[str],
    warn: bool = True,
) -> Optional[str]:
    """
    Map free-form category text onto a :class:`VehicleCategory` value.

    Spacing, hyphens and case are ignored and known synonyms are folded in.
    Anything unrecognised gives ``None``, which rule matching treats as "no
    category".
    """
    if value is None:
        return None
    key = str(value).strip().lower().replace("-", "_").replace(" ", "_")
    if not key:
        return None
    if key in VEHICLE_CATEGORY_SYNONYMS:
        return VEHICLE_CATEGORY_SYNONYMS[key].value
    if key in VehicleCategory.values:
        return key
    if warn:
        logger.warning("Unrecognised vehicle category %r", value)
    return None


class RelationshipType(models.TextChoices):
    """How a commodity line relates to another line of the same quotation."""

    SEPARATE = "separate", "Separate"
    # Towed behind, or coupled to, the related line.
    CONNECTED = "connected", "Connected"
    # Loaded onto the related line, which is the base of the stack.
    LOADED_WITH = "loaded_with", "Loaded with"


RELATIONSHIP_TYPE_SYNONYMS = {
    "stacked": RelationshipType.LOADED_WITH,
    "stack": RelationshipType.LOADED_WITH,
    "towed": RelationshipType.CONNECTED,
}


def normalise_relationship_type(value: Optional[str]) -> str:
    key = (value or "").strip().lower()
    if key in RELATIONSHIP_TYPE_SYNONYMS:
        return RELATIONSHIP_TYPE_SYNONYMS[key].value
    if key in RelationshipType.values:
        return key
    return RelationshipType.SEPARATE.value


class PdfCategory(models.TextChoices):
    """Columns of a carrier purchase rate sheet."""

    CAR = "CAR", "Car"
    SVAN = "SVAN", "Small van"
    BVAN = "BVAN", "Big van"
    LM = "LM", "LM cargo"


class CalcMode(models.TextChoices):
    FLAT = "FLAT", "Flat amount"
    PER_UNIT = "PER_UNIT", "Per unit"
    PERCENT_OF_BASIC_FREIGHT = "PERCENT_OF_BASIC_FREIGHT", "Percent of basic freight"
    WEIGHT_TIER = "WEIGHT_TIER", "Weight tier"
    PER_TON_ABOVE = "PER_TON_ABOVE", "Per ton above threshold"
    PER_TANK = "PER_TANK", "Per tank"
    PER_LM = "PER_LM", "Per LM"
    WIDTH_LM_BASIS = "WIDTH_LM_BASIS", "Overwidth on LM basis"
    WIDTH_STEP_BLOCKS = "WIDTH_STEP_BLOCKS", "Overwidth in step blocks"


class TransformCode(models.TextChoices):
    OVERWIDTH_LM_RECALC = "OVERWIDTH_LM_RECALC", "Overwidth LM recalculation"


class AcceptanceStatus(models.TextChoices):
    ALLOWED = "ALLOWED", "Allowed"
    ALLOWED_WITH_SURCHARGES = "ALLOWED_WITH_SURCHARGES", "Allowed with surcharges"
    ALLOWED_UPON_REQUEST = "ALLOWED_UPON_REQUEST", "Allowed upon request"
    NOT_ALLOWED = "NOT_ALLOWED", "Not allowed"


class QuantityMode(models.TextChoices):
    """How a surcharge article line takes its quantity from an event."""

    EVENT = "EVENT", "Event quantity"
    SINGLE = "SINGLE", "Single unit"


class TariffUnit(models.TextChoices):
    LUMPSUM = "LUMPSUM", "Lump sum"
    LM = "LM", "Per LM"
    UNIT = "UNIT", "Per unit"
    CBM = "CBM", "Per CBM"
    TON = "TON", "Per ton"


# Flags a cargo line can carry, checked by acceptance rules.
FLAG_EMPTY = "empty"
FLAG_NON_SELF_PROPELLED = "non_self_propelled"
