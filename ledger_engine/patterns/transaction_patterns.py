"""
Transaction pattern tables for classification and categorization.

Patterns are declarative data, validated once at import time:
- Income patterns (ordered regexes with a display name)
- Spending category patterns (ordered keyword tables)
- Credit card payment phrases
- Transfer keywords
- Account type keywords used when ingesting bridge accounts
"""

# Income Patterns
# Ordered (regex, display name) pairs. The first match wins, so more specific
# payroll patterns come before generic credit/refund patterns.
INCOME_PATTERNS = [
    # Payroll
    (r"payroll", "Payroll"),
    (r"direct\s*dep(osit)?", "Direct Deposit"),
    (r"salary", "Salary"),
    (r"wages?", "Wages"),
    (r"pay\s*check", "Paycheck"),
    (r"ach\s*credit.*payroll", "ACH Payroll"),

    # Employer
    (r"employer\s*(payment|deposit)", "Employer Payment"),
    (r"compensation", "Compensation"),

    # Deposits
    (r"ach\s*credit", "ACH Credit"),
    (r"wire\s*transfer\s*(in|credit|deposit)", "Wire Transfer"),
    (r"direct\s*deposit", "Direct Deposit"),

    # Government and benefits
    (r"ssa\s*(treas|payment)", "Social Security"),
    (r"social\s*security", "Social Security"),
    (r"ssi\s*(payment|deposit)", "SSI Payment"),
    (r"irs\s*(treas|refund)", "IRS Refund"),
    (r"tax\s*refund", "Tax Refund"),
    (r"unemployment", "Unemployment"),
    (r"disability\s*(payment|benefit)", "Disability"),

    # Investment income
    (r"dividend", "Dividend"),
    (r"interest\s*(payment|credit)", "Interest"),

    # Other income
    (r"refund", "Refund"),
    (r"rebate", "Rebate"),
    (r"reimbursement", "Reimbursement"),
    (r"cashback", "Cashback"),
    (r"bonus", "Bonus"),
]

# Spending Category Patterns
# Lower-case substrings matched against description, payee and memo.
# Iteration order is significant: the first category with a hit wins.
CATEGORY_PATTERNS = {
    "Dining": [
        "mcdonald", "mcdonalds", "burger king", "wendy's", "wendys",
        "taco bell", "chipotle", "subway", "panera", "chick-fil-a",
        "starbucks", "dunkin", "panda express", "five guys", "in-n-out",
        "olive garden", "applebee", "chili's", "outback", "red lobster",
        "cheesecake factory", "ihop", "denny", "waffle house",
        "domino", "pizza hut", "papa john", "little caesar",
        "doordash", "uber eats", "grubhub", "postmates", "seamless",
        "restaurant", "cafe", "bistro", "grill", "diner", "eatery",
        "tavern", "steakhouse", "sushi", "thai", "chinese", "mexican",
        "italian", "indian", "korean", "japanese", "vietnamese", "greek",
    ],
    "Groceries": [
        "whole foods", "trader joe", "safeway", "kroger", "publix",
        "albertson", "vons", "ralph's", "ralphs", "giant", "shoprite",
        "stop & shop", "food lion", "harris teeter", "h-e-b", "heb",
        "aldi", "lidl", "wegman", "costco", "sam's club", "bj's",
        "sprouts", "natural grocers", "fresh market", "grocery outlet",
        "food 4 less", "food4less", "winco", "meijer", "piggly wiggly",
        "grocery", "supermarket", "market basket", "hannaford",
    ],
    "Shopping": [
        "amazon", "walmart", "target", "best buy",
        "home depot", "lowe's", "lowes", "ikea", "bed bath",
        "kohls", "kohl's", "macy's", "macys", "nordstrom", "jcpenney",
        "ross", "tjmaxx", "tj maxx", "marshalls", "burlington",
        "old navy", "gap", "banana republic", "h&m", "zara", "forever 21",
        "foot locker", "nike", "adidas", "dick's sporting",
        "bath & body", "dollar tree", "dollar general", "five below", "big lots",
        "michaels", "hobby lobby", "joann", "craft", "office depot",
        "staples", "apple store", "microsoft store", "gamestop",
        "wayfair", "overstock", "pier 1", "crate & barrel", "pottery barn",
    ],
    "Transportation": [
        "shell", "chevron", "exxon", "mobil", "bp", "arco",
        "76", "valero", "marathon", "speedway", "wawa", "sheetz",
        "quiktrip", "kwik trip", "racetrac", "circle k", "pilot",
        "loves", "love's", "flying j", "ta travel",
        "uber trip", "uber *trip", "lyft", "taxi", "cab",
        "dmv", "toll", "parking", "garage",
        "jiffy lube", "firestone", "midas", "pep boys", "autozone",
        "o'reilly", "napa auto", "advance auto", "carwash",
        "enterprise", "hertz", "avis", "budget rent", "national rent",
    ],
    "Bills & Utilities": [
        "electric", "power", "energy", "water", "sewer", "gas company",
        "pg&e", "pge", "con edison", "coned", "duke energy", "dominion",
        "xcel", "national grid", "entergy", "aep", "dte energy",
        "at&t", "verizon", "t-mobile", "tmobile", "sprint", "comcast",
        "xfinity", "spectrum", "cox", "frontier", "centurylink",
        "optimum", "dish", "directv", "internet", "cable", "phone bill",
        "waste management", "republic services", "garbage", "trash",
        "homeowner", "hoa", "condo association",
    ],
    "Entertainment": [
        "netflix", "hulu", "disney+", "disney plus", "hbo", "max",
        "amazon prime", "apple tv", "peacock", "paramount+", "paramount plus",
        "spotify", "apple music", "pandora", "tidal", "youtube premium",
        "audible", "kindle unlimited", "playstation", "xbox", "nintendo",
        "steam", "epic games", "twitch", "patreon",
        "amc", "regal", "cinemark", "movie theater", "cinema",
        "bowling", "arcade", "dave & buster", "escape room",
        "museum", "zoo", "aquarium", "theme park", "amusement",
        "concert", "ticketmaster", "stubhub", "vivid seats", "eventbrite",
    ],
    "Health & Fitness": [
        "gym", "fitness", "planet fitness", "la fitness", "24 hour fitness",
        "equinox", "orangetheory", "crossfit", "peloton", "soulcycle",
        "yoga", "pilates", "martial arts",
        "pharmacy", "cvs", "walgreens", "rite aid", "prescription",
        "doctor", "physician", "dentist", "orthodontist", "optometrist",
        "hospital", "clinic", "urgent care", "labcorp", "quest diagnostics",
        "therapist", "chiropractor", "physical therapy",
        "vitamin", "gnc", "supplement", "wellness",
    ],
    "Travel": [
        "airline", "delta", "united", "american airlines", "southwest",
        "jetblue", "spirit", "alaska air",
        "hotel", "marriott", "hilton", "hyatt", "ihg", "wyndham",
        "best western", "holiday inn", "hampton inn", "courtyard",
        "airbnb", "vrbo", "booking.com", "expedia", "kayak", "orbitz",
        "priceline", "hotels.com", "tripadvisor", "travelocity",
        "tsa", "airport", "amtrak", "greyhound", "cruise",
    ],
    "Subscriptions": [
        "subscription", "monthly", "annual",
        "adobe", "microsoft 365", "office 365", "google one", "icloud",
        "dropbox", "evernote", "notion", "slack", "zoom",
        "linkedin premium", "dating app", "tinder", "bumble", "hinge",
        "newspaper", "new york times", "washington post", "wall street journal",
        "magazine", "membership",
    ],
    "Personal Care": [
        "salon", "barber", "hair", "spa", "massage", "nail",
        "manicure", "pedicure", "waxing", "facial", "skincare",
        "sephora", "ulta", "beauty", "cosmetic", "makeup",
    ],
    "Education": [
        "tuition", "college", "university", "school", "course",
        "udemy", "coursera", "linkedin learning", "skillshare",
        "masterclass", "brilliant", "textbook", "tutoring",
        "student loan", "education",
    ],
    "Insurance": [
        "geico", "progressive", "state farm", "allstate", "liberty mutual",
        "farmers", "usaa", "nationwide", "travelers", "amica",
        "insurance", "premium", "coverage",
    ],
    "Pets": [
        "petco", "petsmart", "pet supplies plus", "chewy",
        "veterinary", "animal hospital", "grooming",
    ],
}

# Credit Card Payment Phrases
# Matched against description and payee of outgoing transactions
CC_PAYMENT_PATTERNS = [
    "credit card payment",
    "cc payment",
    "card payment",
    "payment to card",
    "autopay payment",
    "minimum payment",
    "statement balance",
]

# Transfer Keywords
# Used to flag transfer-shaped transactions that have no matched counterpart
TRANSFER_KEYWORDS = [
    "transfer",
    "xfer",
    "tfr",
    "move money",
    "internal",
    "between accounts",
]

# Account Type Keywords
# Ordered (keyword, account type value) pairs applied to the account name at ingestion
ACCOUNT_TYPE_KEYWORDS = [
    ("checking", "checking"),
    ("saving", "savings"),
    ("credit", "credit card"),
    ("invest", "investment"),
    ("brokerage", "investment"),
    ("loan", "loan"),
    ("mortgage", "mortgage"),
]
