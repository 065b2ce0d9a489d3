from typing import Tuple

OUTPUT_COLUMNS: Tuple[str, ...] = (
    "FirstName", "LastName", "StreetNumber", "Street", "City",
    "Province", "PostalCode", "Country", "PhoneNumber", "EmailAddress",
    "Date",
)

OUTPUT_HEADER = ",".join(OUTPUT_COLUMNS)
