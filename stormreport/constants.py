"""
Constants and static data used across the stormreport package.
"""

# The 50 standard US states (DC and territories are not states)
state_abbreviations = {
    "AL": "Alabama",
    "AK": "Alaska",
    "AZ": "Arizona",
    "AR": "Arkansas",
    "CA": "California",
    "CO": "Colorado",
    "CT": "Connecticut",
    "DE": "Delaware",
    "FL": "Florida",
    "GA": "Georgia",
    "HI": "Hawaii",
    "ID": "Idaho",
    "IL": "Illinois",
    "IN": "Indiana",
    "IA": "Iowa",
    "KS": "Kansas",
    "KY": "Kentucky",
    "LA": "Louisiana",
    "ME": "Maine",
    "MD": "Maryland",
    "MA": "Massachusetts",
    "MI": "Michigan",
    "MN": "Minnesota",
    "MS": "Mississippi",
    "MO": "Missouri",
    "MT": "Montana",
    "NE": "Nebraska",
    "NV": "Nevada",
    "NH": "New Hampshire",
    "NJ": "New Jersey",
    "NM": "New Mexico",
    "NY": "New York",
    "NC": "North Carolina",
    "ND": "North Dakota",
    "OH": "Ohio",
    "OK": "Oklahoma",
    "OR": "Oregon",
    "PA": "Pennsylvania",
    "RI": "Rhode Island",
    "SC": "South Carolina",
    "SD": "South Dakota",
    "TN": "Tennessee",
    "TX": "Texas",
    "UT": "Utah",
    "VT": "Vermont",
    "VA": "Virginia",
    "WA": "Washington",
    "WV": "West Virginia",
    "WI": "Wisconsin",
    "WY": "Wyoming",
}

US_STATES = tuple(sorted(state_abbreviations))

# NOAA StormEvents files spell out state names in ALL CAPS
STATE_NAME_TO_ABBREV = {v.upper(): k for k, v in state_abbreviations.items()}
STATE_NAME_TO_ABBREV.update({
    'DISTRICT OF COLUMBIA': 'DC',
    'PUERTO RICO': 'PR',
    'VIRGIN ISLANDS': 'VI',
    'GUAM': 'GU',
    'AMERICAN SAMOA': 'AS',
})

# Damage unit letter -> power-of-ten exponent
UNIT_EXPONENTS = {
    "H": 2,
    "K": 3,
    "M": 6,
    "B": 9,
}

# Column names of the clean record table
EVENT_TYPE = "event_type"
STATE = "state"
START_DATE = "start_date"
INJURIES = "injuries"
FATALITIES = "fatalities"
PROPERTY_DAMAGE = "property_damage"
CROP_DAMAGE = "crop_damage"
TOTAL_DAMAGE = "total_damage"

# Raw record columns (magnitude + unit indicator pairs)
PROPERTY_MAGNITUDE = "property_damage_magnitude"
PROPERTY_UNIT = "property_damage_unit"
CROP_MAGNITUDE = "crop_damage_magnitude"
CROP_UNIT = "crop_damage_unit"

RAW_COLUMNS = [
    EVENT_TYPE, STATE, START_DATE, INJURIES, FATALITIES,
    PROPERTY_MAGNITUDE, PROPERTY_UNIT, CROP_MAGNITUDE, CROP_UNIT,
]

CLEAN_COLUMNS = [
    EVENT_TYPE, STATE, START_DATE, INJURIES, FATALITIES,
    PROPERTY_DAMAGE, CROP_DAMAGE, TOTAL_DAMAGE,
]

# Source file layouts: raw header -> RawRecord field
SOURCE_LAYOUTS = {
    # Course extract of the NOAA Storm Database (StormData.csv.bz2)
    "storm_data": {
        "EVTYPE": EVENT_TYPE,
        "STATE": STATE,
        "BGN_DATE": START_DATE,
        "INJURIES": INJURIES,
        "FATALITIES": FATALITIES,
        "PROPDMG": PROPERTY_MAGNITUDE,
        "PROPDMGEXP": PROPERTY_UNIT,
        "CROPDMG": CROP_MAGNITUDE,
        "CROPDMGEXP": CROP_UNIT,
    },
    # NCEI StormEvents_details-ftp_v1.0_dYYYY files
    "storm_events": {
        "EVENT_TYPE": EVENT_TYPE,
        "STATE": STATE,
        "BEGIN_DATE_TIME": START_DATE,
        "INJURIES_DIRECT": INJURIES,
        "DEATHS_DIRECT": FATALITIES,
        "DAMAGE_PROPERTY": PROPERTY_MAGNITUDE,
        "DAMAGE_CROPS": CROP_MAGNITUDE,
    },
}

# Start date format per layout. StormEvents years are two digits ('28-APR-50')
# and get their century from the YEAR column.
SOURCE_DATE_FORMATS = {
    "storm_data": "%m/%d/%Y %H:%M:%S",
    "storm_events": "%d-%b-%y %H:%M:%S",
}

# Four-digit year column carried by a layout, used to correct the century
SOURCE_YEAR_COLUMNS = {
    "storm_events": "YEAR",
}

# Source info, mirrored into the report summary
SOURCE_INFO = {
    "source_id": "noaa_storm_data",
    "source_name": "NOAA Storm Database",
    "source_url": "https://d396qusza40orc.cloudfront.net/repdata%2Fdata%2FStormData.csv.bz2",
    "license": "Public Domain (US Government)",
    "description": "Storm events for US states with casualties and damage estimates (1950-2011)",
}
