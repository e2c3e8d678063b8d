# Catalogue of common anti-seizure medications offered in the form
COMMON_MEDICATIONS = [
    "Valproate",
    "Levetiracetam",
    "Lamotrigine",
    "Carbamazepine",
    "Oxcarbazepine",
    "Topiramate",
    "Lacosamide",
    "Perampanel",
    "Clobazam",
    "Gabapentin",
]

# Selecting this label enables a free-text follow-up item
OTHER_FOLLOW_UP_ITEM = "Other"

FOLLOW_UP_ITEMS = [
    "EEG",
    "Serum drug level monitoring",
    "Blood count / biochemistry",
    "Seizure frequency log",
    "Adverse effect screening",
    OTHER_FOLLOW_UP_ITEM,
]

SEIZURE_TYPES = [
    "Focal",
    "Generalized",
    "Focal to bilateral tonic-clonic",
    "Unclassified",
]

DEFAULT_INTERVAL_MONTHS = 3
