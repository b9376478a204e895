"""Singapore postal code → planning area lookup.

Standard postal districts (01-45) map on the 2-digit prefix. HDB estate and
newer codes (46+) straddle several planning areas within one 2-digit prefix,
so the 3-digit table is consulted first for those ranges.

Sources: URA postal districts, HDB town postal ranges, OneMap reverse-geocode.
"""

NO_POSTAL_CODE = "NIL"  # OneMap placeholder for "no postal code"


def _span(first: int, last: int, area: str) -> dict[str, str]:
    return {f"{prefix:03d}": area for prefix in range(first, last + 1)}


POSTAL_PREFIX_3D: dict[str, str] = {
    **_span(310, 319, "TOA PAYOH"),
    **_span(460, 469, "BEDOK"),
    **_span(470, 489, "CHANGI"),
    **_span(510, 519, "PASIR RIS"),
    **_span(520, 529, "TAMPINES"),
    **_span(530, 539, "HOUGANG"),
    # 540-549 is split between Sengkang and Hougang
    **_span(540, 544, "SENGKANG"),
    **_span(545, 549, "HOUGANG"),
    **_span(550, 559, "SERANGOON"),
    **_span(560, 569, "ANG MO KIO"),
    **_span(570, 579, "BISHAN"),
    **_span(600, 607, "CLEMENTI"),
    **_span(608, 609, "JURONG EAST"),
    **_span(610, 619, "BUKIT MERAH"),
    **_span(620, 629, "QUEENSTOWN"),
    # 630-649 is split between Jurong West and Boon Lay
    **_span(630, 642, "JURONG WEST"),
    **_span(643, 649, "BOON LAY"),
    **_span(650, 659, "BUKIT BATOK"),
    **_span(670, 679, "BUKIT PANJANG"),
    **_span(680, 689, "CHOA CHU KANG"),
    **_span(730, 739, "WOODLANDS"),
    **_span(750, 759, "SEMBAWANG"),
    **_span(760, 769, "YISHUN"),
    **_span(820, 828, "PUNGGOL"),
}

POSTAL_PREFIX_2D: dict[str, str] = {
    # D01 Raffles Place, Cecil, Marina, People's Park
    "01": "DOWNTOWN CORE", "02": "DOWNTOWN CORE", "03": "DOWNTOWN CORE",
    "04": "DOWNTOWN CORE", "05": "DOWNTOWN CORE", "06": "DOWNTOWN CORE",
    # D02 Anson, Tanjong Pagar
    "07": "OUTRAM", "08": "OUTRAM",
    # D03 Queenstown, Tiong Bahru
    "09": "QUEENSTOWN", "10": "QUEENSTOWN",
    # D04 Telok Blangah, Harbourfront
    "11": "BUKIT MERAH", "12": "BUKIT MERAH",
    # D05 Pasir Panjang, Clementi New Town
    "13": "CLEMENTI", "14": "CLEMENTI",
    # D06 High Street, Beach Road
    "15": "DOWNTOWN CORE", "16": "DOWNTOWN CORE",
    # D07 Middle Road, Golden Mile
    "17": "ROCHOR", "18": "ROCHOR",
    # D08 Farrer Park, Serangoon Road
    "19": "ROCHOR", "20": "ROCHOR",
    # D09 Orchard, Cairnhill, River Valley
    "21": "ORCHARD", "22": "RIVER VALLEY",
    # D10 Ardmore, Bukit Timah, Holland, Tanglin
    "23": "TANGLIN", "24": "TANGLIN", "25": "BUKIT TIMAH",
    "26": "BUKIT TIMAH", "27": "BUKIT TIMAH",
    # D11 Novena, Thomson, Moulmein
    "28": "NOVENA", "29": "NOVENA", "30": "NEWTON",
    # D12 Balestier, Toa Payoh, Serangoon
    "31": "TOA PAYOH", "32": "TOA PAYOH", "33": "TOA PAYOH",
    # D13 Macpherson, Braddell
    "34": "GEYLANG", "35": "GEYLANG",
    # D14 Geylang, Eunos
    "36": "GEYLANG", "37": "GEYLANG", "38": "GEYLANG",
    "39": "GEYLANG", "40": "MARINE PARADE", "41": "MARINE PARADE",
    # D15 Katong, Joo Chiat, Amber Road
    "42": "MARINE PARADE", "43": "MARINE PARADE", "44": "MARINE PARADE",
    "45": "MARINE PARADE",
}


def normalize_postal_code(postal_code: str | None) -> str | None:
    """Strip whitespace and zero-pad to 6 digits. None if unusable."""
    if not postal_code:
        return None
    code = "".join(str(postal_code).split())
    if not code or code == NO_POSTAL_CODE:
        return None
    return code.zfill(6)


def resolve_postal_prefix(postal_code: str | None) -> str | None:
    """Resolve a planning area from a postal code.

    3-digit prefix first, then the 2-digit district prefix.
    Returns None when neither table knows the code.
    """
    code = normalize_postal_code(postal_code)
    if code is None:
        return None
    return POSTAL_PREFIX_3D.get(code[:3]) or POSTAL_PREFIX_2D.get(code[:2])
