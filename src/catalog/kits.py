"""
Industry kit catalog.

One KitKnowledge entry per supported industry. Kits share question objects
(team size, billing, booking...) so that switching kits mid-conversation never
re-asks a question the user already answered: the engine tracks questions by id.

Keywords include the misspellings people actually type ("plumer", "resturant");
the fallback industry resolver matches them as word prefixes.
"""

from typing import Optional

from src.catalog.schema import KitKnowledge, SlotName, SmartQuestion, SubVerticalOption


# =============================================================================
# Shared Questions
# =============================================================================

TEAM_SIZE = SmartQuestion(
    id="team_size",
    question="Is it just you, or do you have a team?",
    purpose="Decides multi-user support, assignments and permissions",
    slot=SlotName.TEAM_SIZE,
    options=["Just me", "Small team (2-5)", "Larger team (6+)"],
)

CUSTOMER_BOOKING = SmartQuestion(
    id="customer_booking",
    question="Should customers be able to book or order through this?",
    purpose="Decides whether the app gets a customer-facing side",
    slot=SlotName.CUSTOMER_FACING,
    options=["Yes, customers will use it", "No, just internal", "Maybe later"],
    enables=["appointments", "booking_widget"],
)

BILLING = SmartQuestion(
    id="billing",
    question="Do you send quotes or estimates before you invoice?",
    purpose="Adds the quote-to-invoice flow",
    options=["Yes, quotes first", "Just invoices", "Neither"],
    enables=["quotes", "invoicing"],
)

PAYMENTS = SmartQuestion(
    id="payments",
    question="Do you want to take card payments through the app?",
    purpose="Adds online payment collection",
    options=["Yes", "No, I get paid another way"],
    enables=["invoicing", "payments"],
)

REMINDERS = SmartQuestion(
    id="reminders",
    question="Want automatic reminders sent before appointments?",
    purpose="Cuts no-shows with reminder messages",
    options=["Yes, text reminders", "Yes, email reminders", "No thanks"],
    enables=["reminders", "notifications"],
)

INVENTORY = SmartQuestion(
    id="inventory",
    question="Do you need to keep track of parts, materials or stock?",
    purpose="Adds inventory and low-stock alerts",
    options=["Yes", "No"],
    enables=["inventory"],
)

DOCUMENTS = SmartQuestion(
    id="documents",
    question="Do you need to store contracts, forms or other documents?",
    purpose="Adds document storage and e-signatures",
    options=["Yes, with signatures", "Just storage", "No"],
    enables=["documents", "signatures"],
)

INTEGRATIONS = SmartQuestion(
    id="integrations",
    question="Any tools this should connect to, like Stripe, Google Calendar or QuickBooks?",
    purpose="Records third-party integrations",
    slot=SlotName.INTEGRATIONS,
    options=["Stripe", "Google Calendar", "Email", "None for now"],
)

REPORTING = SmartQuestion(
    id="reporting",
    question="Would a dashboard with your key numbers be useful?",
    purpose="Adds dashboard and reports",
    options=["Yes", "Not really"],
    enables=["dashboard", "reports"],
)

BUSINESS_TYPE = SmartQuestion(
    id="business_type",
    question="What does your business do? What's the main service or product?",
    purpose="Resolves the industry when the description did not",
    slot=SlotName.INDUSTRY,
)

TRACKING = SmartQuestion(
    id="tracking",
    question="What are the main things you need to keep track of? (e.g., customers, jobs, appointments)",
    purpose="Identifies the primary records of the app",
    slot=SlotName.PRIMARY_ENTITIES,
)

# Questions with no slot are never "already known", so the engine can always
# reach MIN_QUESTIONS from this tail.
FALLBACK_QUESTIONS: list[SmartQuestion] = [BILLING, REMINDERS, DOCUMENTS, REPORTING, INTEGRATIONS]


# =============================================================================
# Kit-Specific Questions
# =============================================================================

TRADE_JOB_TYPES = SmartQuestion(
    id="job_types",
    question="What kind of jobs do you handle most - emergency calls, scheduled maintenance, or new installs?",
    purpose="Shapes job tracking and dispatch",
    options=["Emergency calls", "Scheduled maintenance", "New installs", "A mix"],
    enables=["job_tracking", "status_tracking"],
)

REAL_ESTATE_SUB_VERTICAL = SmartQuestion(
    id="sub_vertical",
    question="Are you managing rental properties, or helping people buy/sell homes?",
    purpose="Separates property management from agent work",
    slot=SlotName.SUB_VERTICAL,
    options=[
        "Managing rental properties (landlord/property manager)",
        "Helping people buy/sell homes (real estate agent)",
    ],
)

FITNESS_SUB_VERTICAL = SmartQuestion(
    id="sub_vertical",
    question="Are you a personal trainer working 1-on-1, or running a gym with memberships?",
    purpose="Separates personal training from gym management",
    slot=SlotName.SUB_VERTICAL,
    options=["Personal trainer (1-on-1 clients)", "Gym or studio with memberships"],
)

CLEANING_SUB_VERTICAL = SmartQuestion(
    id="sub_vertical",
    question="Are you cleaning homes, or commercial/office buildings?",
    purpose="Separates residential from commercial cleaning",
    slot=SlotName.SUB_VERTICAL,
    options=["Residential cleaning (homes)", "Commercial cleaning (offices/buildings)"],
)


def _complexity(question: str, options: list[str]) -> SmartQuestion:
    return SmartQuestion(
        id="complexity",
        question=question,
        purpose="Sizes the app: features, UI density and permissions",
        slot=SlotName.COMPLEXITY,
        options=options,
    )


PROPERTY_SCALE = _complexity(
    "How many properties do you manage?",
    ["1-5 properties (solo landlord)", "6-50 properties (small company)", "50+ properties (large company)"],
)
GYM_SCALE = _complexity(
    "What's the size of your gym?",
    ["Small studio (1 location)", "Medium gym (1-3 locations)", "Large gym chain (4+ locations)"],
)
TUTOR_SCALE = _complexity(
    "How many students do you work with?",
    ["1-10 students (independent tutor)", "11-50 students (small tutoring business)", "50+ students (tutoring center)"],
)
CLEANING_SCALE = _complexity(
    "How many clients do you serve?",
    ["1-10 regular clients (solo cleaner)", "11-50 clients (small team)", "50+ clients (cleaning company)"],
)
COMMERCIAL_CLEANING_SCALE = _complexity(
    "How many buildings/contracts do you manage?",
    ["1-5 buildings (small operation)", "6-20 buildings (medium company)", "20+ buildings (large company)"],
)
RESTAURANT_SCALE = _complexity(
    "What's the size of your restaurant operation?",
    ["Single small restaurant", "Busy restaurant or 2-3 locations", "Restaurant group (4+ locations)"],
)
ECOMMERCE_SCALE = _complexity(
    "How many products do you sell?",
    ["Under 50 products (small shop)", "50-500 products (growing store)", "500+ products (large catalog)"],
)
MECHANIC_SCALE = _complexity(
    "What's the size of your auto shop?",
    ["Solo mechanic or 1-2 bays", "Small shop (3-6 bays)", "Large shop or multiple locations"],
)
SALON_SCALE = _complexity(
    "What's the size of your salon?",
    ["Solo stylist or small booth rental", "Salon with 2-5 stylists", "Large salon or multiple locations"],
)
MEDICAL_SCALE = _complexity(
    "What's the size of your practice?",
    ["Solo practitioner", "Small practice (2-5 providers)", "Large practice or multiple clinics"],
)

RESTAURANT_SERVICE = SmartQuestion(
    id="restaurant_service",
    question="Is this for table reservations, online ordering, or kitchen management?",
    purpose="Picks the restaurant workflow to lead with",
    options=["Reservations", "Online ordering", "Kitchen management", "All of it"],
    enables=["appointments", "inventory"],
)

CLASS_SCHEDULE = SmartQuestion(
    id="class_schedule",
    question="Do you run a class schedule members can sign up for?",
    purpose="Adds recurring classes and sign-ups",
    options=["Yes", "No, open gym only"],
    enables=["calendar", "recurring_events", "booking_widget"],
)

MEMBERSHIPS = SmartQuestion(
    id="memberships",
    question="Do members pay a monthly membership fee?",
    purpose="Adds subscription billing",
    options=["Yes", "No, pay per visit"],
    enables=["invoicing", "payments", "subscriptions"],
)

CLIENT_PROGRESS = SmartQuestion(
    id="client_progress",
    question="Do you want to track client progress, like workouts or measurements?",
    purpose="Adds progress tracking per client",
    options=["Yes", "No"],
    enables=["status_tracking", "analytics"],
)

PATIENT_RECORDS = SmartQuestion(
    id="patient_records",
    question="Do you need intake forms or visit notes stored with each patient?",
    purpose="Adds document storage for patient records",
    options=["Yes", "No, we use another system"],
    enables=["documents", "templates"],
)

LISTINGS = SmartQuestion(
    id="listings",
    question="Do you want a pipeline to move listings and buyers from lead to close?",
    purpose="Adds the deal pipeline",
    options=["Yes", "No"],
    enables=["status_tracking", "pipelines"],
)

MAINTENANCE_REQUESTS = SmartQuestion(
    id="maintenance_requests",
    question="Should tenants be able to submit maintenance requests?",
    purpose="Adds a tenant-facing request flow",
    options=["Yes", "No"],
    enables=["job_tracking", "client_portal"],
)

ORDERS = SmartQuestion(
    id="orders",
    question="Do you take custom or pre-orders?",
    purpose="Adds order tracking with pickup dates",
    options=["Yes, custom orders", "Pre-orders only", "No"],
    enables=["job_tracking", "calendar"],
)

GALLERY = SmartQuestion(
    id="gallery",
    question="Do you deliver photos to clients through an online gallery?",
    purpose="Adds file uploads and a client portal",
    options=["Yes", "No"],
    enables=["file_upload", "client_portal"],
)

VEHICLE_HISTORY = SmartQuestion(
    id="vehicle_history",
    question="Do you want to keep a service history for each vehicle?",
    purpose="Adds per-vehicle job history",
    options=["Yes", "No"],
    enables=["job_tracking", "search"],
)

SHIPPING = SmartQuestion(
    id="shipping",
    question="Do you ship orders yourself, or is it pickup/local delivery?",
    purpose="Adds order status tracking",
    options=["I ship orders", "Pickup or local delivery", "Both"],
    enables=["status_tracking", "notifications"],
)

CARE_VISITS = SmartQuestion(
    id="care_visits",
    question="Do caregivers need to log visit notes for each client?",
    purpose="Adds visit notes and assignments",
    options=["Yes", "No"],
    enables=["comments", "documents"],
)

ENGAGEMENTS = SmartQuestion(
    id="engagements",
    question="Do you bill by the hour, by project, or on retainer?",
    purpose="Shapes project tracking and invoicing",
    options=["Hourly", "By project", "Retainer"],
    enables=["job_tracking", "invoicing"],
)


# =============================================================================
# Kits
# =============================================================================

TEAM_SIZE_FEATURES: dict[str, list[str]] = {
    "solo": [],
    "small": ["user_management", "assignments"],
    "medium": ["user_management", "assignments", "roles"],
    "large": ["user_management", "assignments", "roles"],
}


KITS: list[KitKnowledge] = [
    KitKnowledge(
        id="plumber",
        name="Plumbing",
        category="trades",
        profession="plumber",
        keywords=[
            "plumber", "plumbing", "pipe", "drain", "leak", "water heater", "toilet",
            "plumer", "plumbr", "pluming", "plummer",
        ],
        entities=["client", "job", "quote", "invoice", "material", "appointment"],
        smart_questions=[TEAM_SIZE, TRADE_JOB_TYPES, BILLING, CUSTOMER_BOOKING, INVENTORY],
        core_features=["job_tracking", "invoicing", "calendar"],
        optional_features=["quotes", "inventory", "payments", "sms", "reminders"],
        feature_descriptions={
            "job_tracking": "track every job from call to completion",
            "invoicing": "invoice customers when the job is done",
            "calendar": "see your week of appointments",
            "quotes": "send quotes before you start",
            "inventory": "keep tabs on parts in the van",
        },
    ),
    KitKnowledge(
        id="electrician",
        name="Electrical Services",
        category="trades",
        profession="electrician",
        keywords=[
            "electrician", "electrical", "wiring", "circuit", "panel", "outlet",
            "electrition", "electricain", "electritian",
        ],
        entities=["client", "job", "quote", "invoice", "material"],
        smart_questions=[TEAM_SIZE, TRADE_JOB_TYPES, BILLING, CUSTOMER_BOOKING, INVENTORY],
        core_features=["job_tracking", "invoicing", "calendar"],
        optional_features=["quotes", "inventory", "signatures", "payments"],
        feature_descriptions={
            "job_tracking": "track jobs and permits",
            "invoicing": "bill for labor and materials",
            "quotes": "quote panel upgrades and rewires",
        },
    ),
    KitKnowledge(
        id="hvac",
        name="HVAC",
        category="trades",
        profession="hvac",
        keywords=["hvac", "heating", "cooling", "air conditioning", "furnace", "heat pump"],
        entities=["client", "job", "quote", "invoice", "material", "appointment"],
        smart_questions=[TEAM_SIZE, TRADE_JOB_TYPES, REMINDERS, BILLING, INVENTORY],
        core_features=["job_tracking", "invoicing", "calendar", "reminders"],
        optional_features=["quotes", "inventory", "recurring_events", "payments"],
        feature_descriptions={
            "reminders": "remind customers about seasonal maintenance",
            "recurring_events": "schedule maintenance plans",
        },
    ),
    KitKnowledge(
        id="contractor",
        name="Construction / Contractor",
        category="trades",
        profession="contractor",
        keywords=[
            "contractor", "construction", "renovation", "remodel", "builder",
            "subcontractor", "change order", "contracter", "contruction",
        ],
        entities=["client", "project", "quote", "invoice", "document"],
        smart_questions=[TEAM_SIZE, BILLING, DOCUMENTS, INVENTORY, CUSTOMER_BOOKING],
        core_features=["job_tracking", "quotes", "invoicing", "documents"],
        optional_features=["signatures", "file_upload", "assignments", "approvals"],
        feature_descriptions={
            "job_tracking": "track projects by phase",
            "quotes": "build estimates and change orders",
            "documents": "keep contracts and permits together",
        },
    ),
    KitKnowledge(
        id="landscaping",
        name="Landscaping",
        category="trades",
        keywords=[
            "landscaping", "landscaper", "lawn", "lawn care", "garden", "yard", "mowing",
            "landscapping", "landscapeing",
        ],
        entities=["client", "job", "quote", "invoice", "appointment"],
        smart_questions=[TEAM_SIZE, CUSTOMER_BOOKING, BILLING, REMINDERS, INVENTORY],
        core_features=["job_tracking", "calendar", "invoicing"],
        optional_features=["recurring_events", "quotes", "payments", "reminders"],
        feature_descriptions={"recurring_events": "set up weekly mowing routes"},
    ),
    KitKnowledge(
        id="cleaning",
        name="Cleaning Services",
        category="services",
        keywords=["cleaning", "cleaner", "maid", "housekeeping", "house cleaning", "home cleaning", "cleaing"],
        entities=["client", "appointment", "invoice", "staff"],
        smart_questions=[CLEANING_SUB_VERTICAL, TEAM_SIZE, CLEANING_SCALE, CUSTOMER_BOOKING, REMINDERS],
        core_features=["appointments", "calendar", "invoicing"],
        optional_features=["recurring_events", "reminders", "payments", "assignments"],
        feature_descriptions={
            "appointments": "book cleanings",
            "recurring_events": "set up weekly or bi-weekly cleanings",
        },
        sub_verticals=[
            SubVerticalOption(
                value="residential",
                label="Residential cleaning (homes)",
                kit="cleaning",
                keywords=["home", "house", "residential", "apartment"],
            ),
            SubVerticalOption(
                value="commercial",
                label="Commercial cleaning (offices/buildings)",
                kit="commercial-cleaning",
                keywords=["commercial", "office", "building", "janitorial"],
            ),
        ],
    ),
    KitKnowledge(
        id="commercial-cleaning",
        name="Commercial Cleaning",
        category="services",
        keywords=["commercial cleaning", "janitorial", "office cleaning", "facility cleaning", "janitor"],
        entities=["client", "site", "contract", "staff", "invoice"],
        smart_questions=[COMMERCIAL_CLEANING_SCALE, TEAM_SIZE, DOCUMENTS, BILLING, REPORTING],
        core_features=["job_tracking", "calendar", "invoicing", "assignments"],
        optional_features=["documents", "recurring_events", "status_tracking", "reports"],
        feature_descriptions={
            "assignments": "assign crews to buildings",
            "documents": "keep service contracts on file",
        },
    ),
    KitKnowledge(
        id="real-estate",
        name="Real Estate",
        category="real_estate",
        profession="realtor",
        keywords=[
            "real estate", "realtor", "realestate", "broker", "listing", "home sale",
            "realator", "relator", "real estate agent",
        ],
        entities=["client", "property", "appointment", "document"],
        smart_questions=[REAL_ESTATE_SUB_VERTICAL, TEAM_SIZE, LISTINGS, DOCUMENTS, CUSTOMER_BOOKING],
        core_features=["status_tracking", "calendar", "documents"],
        optional_features=["pipelines", "signatures", "messaging", "client_portal"],
        feature_descriptions={
            "status_tracking": "move deals from lead to close",
            "calendar": "schedule showings",
        },
        sub_verticals=[
            SubVerticalOption(
                value="sales",
                label="Helping people buy/sell homes (real estate agent)",
                kit="real-estate",
                keywords=["buy", "sell", "sale", "listing", "agent", "commission", "showing"],
            ),
            SubVerticalOption(
                value="rentals",
                label="Managing rental properties (landlord/property manager)",
                kit="property-management",
                keywords=["rental", "rent", "lease", "tenant", "landlord", "property manag"],
            ),
        ],
    ),
    KitKnowledge(
        id="property-management",
        name="Property Management",
        category="real_estate",
        profession="property-manager",
        keywords=[
            "property management", "property manager", "landlord", "tenant", "lease", "rental",
            "rental property", "rent collection", "apartment manager", "propery management",
        ],
        entities=["property", "tenant", "lease", "invoice", "document"],
        smart_questions=[PROPERTY_SCALE, TEAM_SIZE, MAINTENANCE_REQUESTS, PAYMENTS, DOCUMENTS],
        core_features=["status_tracking", "invoicing", "documents", "calendar"],
        optional_features=["payments", "client_portal", "signatures", "reminders"],
        feature_descriptions={
            "invoicing": "collect rent every month",
            "documents": "store leases",
            "client_portal": "let tenants submit maintenance requests",
        },
    ),
    KitKnowledge(
        id="fitness-coach",
        name="Personal Training",
        category="fitness",
        profession="personal-trainer",
        keywords=[
            "personal trainer", "trainer", "fitness coach", "fitness", "workout coach",
            "1-on-1 training", "personal training", "coach", "excercise",
        ],
        entities=["client", "appointment", "invoice"],
        smart_questions=[FITNESS_SUB_VERTICAL, TEAM_SIZE, CLIENT_PROGRESS, CUSTOMER_BOOKING, PAYMENTS],
        core_features=["appointments", "calendar", "invoicing"],
        optional_features=["status_tracking", "messaging", "payments", "reminders"],
        feature_descriptions={
            "appointments": "book sessions",
            "status_tracking": "track client progress",
        },
        sub_verticals=[
            SubVerticalOption(
                value="personal",
                label="Personal trainer (1-on-1 clients)",
                kit="fitness-coach",
                keywords=["personal", "1-on-1", "one-on-one", "individual", "private"],
            ),
            SubVerticalOption(
                value="gym",
                label="Gym or studio with memberships",
                kit="gym",
                keywords=["gym", "studio", "membership", "members", "classes"],
            ),
        ],
    ),
    KitKnowledge(
        id="gym",
        name="Gym / Fitness Studio",
        category="fitness",
        keywords=["gym", "fitness studio", "membership", "fitness class", "workout class", "crossfit", "yoga studio"],
        entities=["member", "class", "membership", "invoice"],
        smart_questions=[GYM_SCALE, TEAM_SIZE, CLASS_SCHEDULE, MEMBERSHIPS, CUSTOMER_BOOKING],
        core_features=["calendar", "subscriptions", "user_management"],
        optional_features=["booking_widget", "recurring_events", "payments", "analytics"],
        feature_descriptions={
            "subscriptions": "bill memberships monthly",
            "calendar": "publish the class schedule",
        },
    ),
    KitKnowledge(
        id="salon",
        name="Salon / Spa",
        category="services",
        keywords=[
            "salon", "beauty", "hair", "spa", "nail", "barber", "stylist",
            "saloon", "hair dresser", "hairdresser",
        ],
        entities=["client", "appointment", "staff", "invoice"],
        smart_questions=[SALON_SCALE, TEAM_SIZE, CUSTOMER_BOOKING, REMINDERS, PAYMENTS],
        core_features=["appointments", "calendar", "reminders"],
        optional_features=["booking_widget", "payments", "sms", "inventory"],
        feature_descriptions={
            "appointments": "book clients with the right stylist",
            "reminders": "cut no-shows with reminders",
        },
    ),
    KitKnowledge(
        id="restaurant",
        name="Restaurant",
        category="hospitality",
        keywords=[
            "restaurant", "cafe", "diner", "dining", "menu", "takeout", "reservation", "bistro",
            "resturant", "restaraunt", "restuarant",
        ],
        entities=["menu_item", "order", "reservation", "table", "staff"],
        smart_questions=[RESTAURANT_SCALE, RESTAURANT_SERVICE, TEAM_SIZE, CUSTOMER_BOOKING, INVENTORY],
        core_features=["calendar", "inventory", "dashboard"],
        optional_features=["appointments", "booking_widget", "payments", "sms"],
        feature_descriptions={
            "inventory": "track ingredients and stock",
            "appointments": "take table reservations",
        },
    ),
    KitKnowledge(
        id="bakery",
        name="Bakery",
        category="hospitality",
        keywords=["bakery", "baker", "pastry", "bread", "cake", "cupcake", "bakary", "bakey"],
        entities=["product", "order", "customer", "invoice"],
        smart_questions=[ORDERS, TEAM_SIZE, INVENTORY, CUSTOMER_BOOKING, PAYMENTS],
        core_features=["job_tracking", "inventory", "calendar"],
        optional_features=["payments", "notifications", "booking_widget"],
        feature_descriptions={
            "job_tracking": "track custom cake orders",
            "inventory": "watch flour and ingredient stock",
        },
    ),
    KitKnowledge(
        id="medical",
        name="Medical Practice",
        category="healthcare",
        profession="medical-practice",
        keywords=["medical", "clinic", "doctor", "physician", "patient", "healthcare"],
        entities=["patient", "appointment", "document", "invoice"],
        smart_questions=[MEDICAL_SCALE, TEAM_SIZE, PATIENT_RECORDS, REMINDERS, CUSTOMER_BOOKING],
        core_features=["appointments", "calendar", "documents", "reminders"],
        optional_features=["messaging", "templates", "invoicing", "roles"],
        feature_descriptions={
            "documents": "store intake forms and visit notes",
            "reminders": "send appointment reminders",
        },
    ),
    KitKnowledge(
        id="dental",
        name="Dental Practice",
        category="healthcare",
        profession="dental",
        keywords=["dentist", "dental", "teeth", "orthodontist", "hygienist", "dentistry"],
        entities=["patient", "appointment", "document", "invoice"],
        smart_questions=[MEDICAL_SCALE, TEAM_SIZE, REMINDERS, PATIENT_RECORDS, PAYMENTS],
        core_features=["appointments", "calendar", "reminders", "invoicing"],
        optional_features=["documents", "payments", "recurring_events"],
        feature_descriptions={"reminders": "send six-month recall reminders"},
    ),
    KitKnowledge(
        id="therapy",
        name="Therapy Practice",
        category="healthcare",
        profession="therapy",
        keywords=["therapist", "therapy", "counselor", "counseling", "psychologist", "mental health", "counsellor"],
        entities=["client", "appointment", "document", "invoice"],
        smart_questions=[TEAM_SIZE, PATIENT_RECORDS, REMINDERS, CUSTOMER_BOOKING, PAYMENTS],
        core_features=["appointments", "calendar", "documents", "invoicing"],
        optional_features=["reminders", "booking_widget", "templates"],
        feature_descriptions={"documents": "keep session notes private and organized"},
    ),
    KitKnowledge(
        id="home-health",
        name="Home Health Care",
        category="healthcare",
        keywords=["home health", "caregiver", "senior care", "elderly care", "home aide", "home care", "nursing"],
        entities=["care_recipient", "visit", "caregiver", "document"],
        smart_questions=[TEAM_SIZE, CARE_VISITS, REMINDERS, DOCUMENTS, REPORTING],
        core_features=["calendar", "assignments", "user_management", "documents"],
        optional_features=["comments", "reminders", "reports"],
        feature_descriptions={"assignments": "assign caregivers to visits"},
    ),
    KitKnowledge(
        id="tutor",
        name="Tutoring",
        category="services",
        keywords=["tutor", "tutoring", "lesson", "student", "teaching", "teacher", "tutering"],
        entities=["student", "lesson", "invoice"],
        smart_questions=[TUTOR_SCALE, TEAM_SIZE, CUSTOMER_BOOKING, REMINDERS, PAYMENTS],
        core_features=["appointments", "calendar", "invoicing"],
        optional_features=["recurring_events", "reminders", "status_tracking", "payments"],
        feature_descriptions={"status_tracking": "track each student's progress"},
    ),
    KitKnowledge(
        id="mechanic",
        name="Auto Repair",
        category="trades",
        keywords=[
            "mechanic", "auto repair", "car repair", "auto shop", "vehicle", "automotive",
            "mechanik", "mecanic",
        ],
        entities=["vehicle", "vehicle_owner", "job", "quote", "invoice", "part"],
        smart_questions=[MECHANIC_SCALE, TEAM_SIZE, VEHICLE_HISTORY, BILLING, INVENTORY],
        core_features=["job_tracking", "invoicing", "inventory"],
        optional_features=["quotes", "reminders", "sms", "search"],
        feature_descriptions={
            "job_tracking": "track repair orders by vehicle",
            "inventory": "track parts on hand",
        },
    ),
    KitKnowledge(
        id="photography",
        name="Photography",
        category="creative",
        profession="photography",
        keywords=["photographer", "photography", "photo shoot", "photoshoot", "photgrapher", "photograper"],
        entities=["client", "session", "gallery", "invoice"],
        smart_questions=[TEAM_SIZE, GALLERY, BILLING, CUSTOMER_BOOKING, DOCUMENTS],
        core_features=["appointments", "calendar", "invoicing", "file_upload"],
        optional_features=["quotes", "client_portal", "signatures", "payments"],
        feature_descriptions={"file_upload": "deliver galleries"},
    ),
    KitKnowledge(
        id="consulting",
        name="Consulting",
        category="professional",
        profession="consulting",
        keywords=["consultant", "consulting", "advisor", "freelance consultant", "consultancy"],
        entities=["client", "project", "invoice", "document"],
        smart_questions=[TEAM_SIZE, ENGAGEMENTS, DOCUMENTS, PAYMENTS, REPORTING],
        core_features=["job_tracking", "invoicing", "documents"],
        optional_features=["calendar", "signatures", "reports", "client_portal"],
        feature_descriptions={"job_tracking": "track engagements and deliverables"},
    ),
    KitKnowledge(
        id="legal",
        name="Law Firm",
        category="professional",
        profession="law-firm",
        keywords=["lawyer", "attorney", "law firm", "legal", "paralegal", "laywer"],
        entities=["client", "case", "document", "invoice"],
        smart_questions=[TEAM_SIZE, ENGAGEMENTS, DOCUMENTS, REMINDERS, PAYMENTS],
        core_features=["job_tracking", "documents", "calendar", "invoicing"],
        optional_features=["signatures", "templates", "roles", "client_portal"],
        feature_descriptions={"job_tracking": "manage cases and deadlines"},
    ),
    KitKnowledge(
        id="ecommerce",
        name="Online Store",
        category="retail",
        keywords=[
            "ecommerce", "e-commerce", "online store", "online shop", "sell products",
            "shop", "store", "boutique", "retail",
        ],
        entities=["product", "order", "customer", "payment"],
        smart_questions=[ECOMMERCE_SCALE, SHIPPING, TEAM_SIZE, PAYMENTS, INVENTORY],
        core_features=["inventory", "payments", "invoicing", "dashboard"],
        optional_features=["notifications", "analytics", "exports", "email"],
        feature_descriptions={
            "inventory": "keep stock counts accurate",
            "payments": "take card payments at checkout",
        },
    ),
]


GENERAL_KIT = KitKnowledge(
    id="general",
    name="General Business",
    category="services",
    keywords=[],
    entities=["client", "task", "appointment", "invoice"],
    smart_questions=[BUSINESS_TYPE, TRACKING, TEAM_SIZE, CUSTOMER_BOOKING, BILLING],
    core_features=["crud", "dashboard"],
    optional_features=["calendar", "invoicing", "reminders", "search"],
)


KITS_BY_ID: dict[str, KitKnowledge] = {k.id: k for k in KITS}
KITS_BY_ID[GENERAL_KIT.id] = GENERAL_KIT


def get_kit_knowledge(kit_id: Optional[str]) -> KitKnowledge:
    """
    Look up a kit by id.

    Unknown or missing ids resolve to the general kit, so callers never have to
    handle a missing kit.
    """
    if not kit_id:
        return GENERAL_KIT
    return KITS_BY_ID.get(kit_id, GENERAL_KIT)


def is_known_kit(kit_id: Optional[str]) -> bool:
    return bool(kit_id) and kit_id in KITS_BY_ID and kit_id != GENERAL_KIT.id


def question_plan(kit: KitKnowledge) -> list[SmartQuestion]:
    """Kit questions in order, then the shared fallback tail, without repeats."""
    plan: list[SmartQuestion] = []
    seen: set[str] = set()
    for question in [*kit.smart_questions, *FALLBACK_QUESTIONS]:
        if question.id not in seen:
            seen.add(question.id)
            plan.append(question)
    return plan


def _index_questions() -> dict[str, SmartQuestion]:
    index: dict[str, SmartQuestion] = {}
    for kit in [*KITS, GENERAL_KIT]:
        for question in question_plan(kit):
            index.setdefault(question.id, question)
    return index


QUESTIONS_BY_ID = _index_questions()


def find_question(question_id: Optional[str], kit: Optional[KitKnowledge] = None) -> Optional[SmartQuestion]:
    """
    Look up a question by id, preferring the given kit's own wording.

    Sub-vertical and complexity questions share ids across kits.
    """
    if not question_id:
        return None
    if kit is not None:
        for question in question_plan(kit):
            if question.id == question_id:
                return question
    return QUESTIONS_BY_ID.get(question_id)


__all__ = [
    "KITS",
    "KITS_BY_ID",
    "GENERAL_KIT",
    "FALLBACK_QUESTIONS",
    "TEAM_SIZE_FEATURES",
    "TEAM_SIZE",
    "get_kit_knowledge",
    "is_known_kit",
    "BUSINESS_TYPE",
    "QUESTIONS_BY_ID",
    "question_plan",
    "find_question",
]
