"""
Vehicle aero profiles for CdA lookup.

Each profile is one series / year range / variant of a make + model and
carries an effective drag area (CdA, m^2) as a point value and, where the
spread between published figures is known, min / max bounds. Any of the
three may be None:
  - value None: the caller falls back to its body-type default for the
    point estimate but still uses the bounds for the range sweep.
  - min/max None: the range sweep falls back to the relative CdA margin.

CdA PROVENANCE:
  "mfr Cd x est. A": manufacturer drag coefficient times a frontal area
  estimated from overall width x height x 0.84. Bounds span the Cd spread
  quoted across trims and the frontal-area estimate error.

Make and model strings match the vPIC catalog spelling so a vPIC
selection can be looked up directly.

IMPORTANT: No unicode characters (Windows charmap constraint).
"""

# Each profile entry contains:
#   make, model: vPIC spelling
#   series: generation / chassis code
#   year_from, year_to: model years (inclusive)
#   variant: trim or body style
#   cda: {"value", "min", "max"} in m^2, any may be None
#   source: provenance tag
#   notes: free text for display

CAR_PROFILES = [
    {
        "make": "Volkswagen",
        "model": "Golf",
        "series": "Mk7",
        "year_from": 2013,
        "year_to": 2020,
        "variant": "GTI",
        "cda": {"value": 0.68, "min": 0.64, "max": 0.72},
        "source": "mfr Cd x est. A",
        "notes": "Cd 0.30-0.33 across packages, A ~2.19 m^2",
    },
    {
        "make": "Volkswagen",
        "model": "Golf",
        "series": "Mk7",
        "year_from": 2014,
        "year_to": 2020,
        "variant": "R",
        "cda": {"value": 0.70, "min": 0.66, "max": 0.74},
        "source": "mfr Cd x est. A",
        "notes": "Larger intakes than GTI",
    },
    {
        "make": "Volkswagen",
        "model": "Golf",
        "series": "Mk8",
        "year_from": 2020,
        "year_to": 2024,
        "variant": "GTI",
        "cda": {"value": 0.66, "min": 0.62, "max": 0.70},
        "source": "mfr Cd x est. A",
        "notes": "Cd 0.29-0.31, A ~2.21 m^2",
    },
    {
        "make": "Honda",
        "model": "Civic",
        "series": "FK8",
        "year_from": 2017,
        "year_to": 2021,
        "variant": "Type R",
        "cda": {"value": 0.71, "min": 0.66, "max": 0.76},
        "source": "mfr Cd x est. A",
        "notes": "Rear wing adds drag; Cd quoted 0.32-0.35",
    },
    {
        "make": "Ford",
        "model": "Focus",
        "series": "Mk3",
        "year_from": 2016,
        "year_to": 2018,
        "variant": "RS",
        "cda": {"value": None, "min": 0.66, "max": 0.74},
        "source": "mfr Cd x est. A",
        "notes": "No single published Cd; bounds only",
    },
    {
        "make": "Toyota",
        "model": "GR Yaris",
        "series": "XP210",
        "year_from": 2020,
        "year_to": 2024,
        "variant": "Circuit Pack",
        "cda": {"value": 0.70, "min": None, "max": None},
        "source": "mfr Cd x est. A",
        "notes": "Point value only",
    },
    {
        "make": "BMW",
        "model": "3 Series",
        "series": "G20",
        "year_from": 2019,
        "year_to": 2024,
        "variant": "330i Sedan",
        "cda": {"value": 0.57, "min": 0.55, "max": 0.61},
        "source": "mfr Cd x est. A",
        "notes": "Cd 0.26 (base) to 0.28 (M Sport)",
    },
    {
        "make": "BMW",
        "model": "M3",
        "series": "F80",
        "year_from": 2014,
        "year_to": 2018,
        "variant": "Sedan",
        "cda": {"value": 0.75, "min": 0.70, "max": 0.79},
        "source": "mfr Cd x est. A",
        "notes": "Wide body, Cd ~0.34",
    },
    {
        "make": "Porsche",
        "model": "911",
        "series": "992",
        "year_from": 2019,
        "year_to": 2024,
        "variant": "Carrera",
        "cda": {"value": 0.60, "min": 0.57, "max": 0.63},
        "source": "mfr Cd x est. A",
        "notes": "Active rear spoiler; value is spoiler retracted",
    },
    {
        "make": "Subaru",
        "model": "WRX STI",
        "series": "VA",
        "year_from": 2014,
        "year_to": 2021,
        "variant": "Sedan",
        "cda": {"value": 0.73, "min": 0.69, "max": 0.78},
        "source": "mfr Cd x est. A",
        "notes": "Hood scoop and wing",
    },
    {
        "make": "Tesla",
        "model": "Model 3",
        "series": "Highland",
        "year_from": 2024,
        "year_to": 2025,
        "variant": "Long Range",
        "cda": {"value": 0.49, "min": 0.47, "max": 0.52},
        "source": "mfr Cd x est. A",
        "notes": "Cd 0.219",
    },
    {
        "make": "Tesla",
        "model": "Model 3",
        "series": "Standard",
        "year_from": 2017,
        "year_to": 2023,
        "variant": "Long Range",
        "cda": {"value": 0.51, "min": 0.50, "max": 0.53},
        "source": "mfr Cd x est. A",
        "notes": "Cd 0.23",
    },
]


def _norm(s):
    return (s or "").strip().casefold()


def find_profiles(make, model):
    """All profiles for a make + model (trimmed, case-insensitive)."""
    mk = _norm(make)
    md = _norm(model)
    if not mk or not md:
        return []
    return [p for p in CAR_PROFILES
            if _norm(p["make"]) == mk and _norm(p["model"]) == md]


def profile_key(profile):
    """Display key unique within a make + model: 'series - from-to - variant'."""
    return "{} - {}-{} - {}".format(
        profile["series"], profile["year_from"], profile["year_to"],
        profile["variant"])


def get_profile(make, model, key):
    """Look up one profile by its key. Returns dict or None."""
    for p in find_profiles(make, model):
        if profile_key(p) == key:
            return p
    return None


def list_makes():
    """Makes that have at least one profile, sorted case-insensitively."""
    return sorted({p["make"] for p in CAR_PROFILES}, key=str.casefold)


def list_models(make):
    """Models of a make that have at least one profile."""
    mk = _norm(make)
    models = {p["model"] for p in CAR_PROFILES if _norm(p["make"]) == mk}
    return sorted(models, key=str.casefold)
