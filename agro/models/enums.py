"""Domain enums shared by ORM models, schemas, and the seeding pipeline.

Columns store the plain string values; the enums validate them on the way
in and out of Python.
"""

from enum import StrEnum

# ── Geography ───────────────────────────────────────────────────────────────


class BrazilianState(StrEnum):
    """Federative units (UF): 26 states plus the Federal District."""

    AC = "AC"
    AL = "AL"
    AP = "AP"
    AM = "AM"
    BA = "BA"
    CE = "CE"
    DF = "DF"
    ES = "ES"
    GO = "GO"
    MA = "MA"
    MT = "MT"
    MS = "MS"
    MG = "MG"
    PA = "PA"
    PB = "PB"
    PR = "PR"
    PE = "PE"
    PI = "PI"
    RJ = "RJ"
    RN = "RN"
    RS = "RS"
    RO = "RO"
    RR = "RR"
    SC = "SC"
    SP = "SP"
    SE = "SE"
    TO = "TO"


# ── Agriculture ─────────────────────────────────────────────────────────────


class CropType(StrEnum):
    """Crops tracked per farm and harvest."""

    soy = "soy"
    corn = "corn"
    cotton = "cotton"
    coffee = "coffee"
    sugarcane = "sugarcane"


class ProducerKind(StrEnum):
    """Producer classification, derived from the document length."""

    individual = "individual"
    company = "company"
