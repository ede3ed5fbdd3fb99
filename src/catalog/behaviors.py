"""
Behavior bundle catalog.

Pre-packaged vertical templates. Bundle order matters: the behavior matcher
resolves score ties to the bundle that appears first.
"""

from src.catalog.schema import BehaviorBundle


BEHAVIOR_BUNDLES: list[BehaviorBundle] = [
    # Service businesses
    BehaviorBundle(
        id="plumber",
        name="Plumbing Business",
        description="Complete plumbing business management",
        keywords=["plumber", "plumbing", "pipe", "drain", "water heater", "leak", "toilet"],
        industries=["trades"],
        features=["job_tracking", "scheduling", "invoicing", "quotes", "inventory", "messaging", "dashboard"],
        entities=["client", "job", "quote", "invoice", "material", "appointment"],
        workflows=["create-job", "complete-job", "create-invoice", "send-invoice"],
        theme="professional",
        weight=10,
    ),
    BehaviorBundle(
        id="electrician",
        name="Electrical Business",
        description="Jobs, quotes and invoices for electrical contractors",
        keywords=["electrician", "electrical", "wiring", "panel", "circuit", "outlet"],
        industries=["trades"],
        features=["job_tracking", "scheduling", "invoicing", "quotes", "inventory", "dashboard"],
        entities=["client", "job", "quote", "invoice", "material"],
        workflows=["create-job", "complete-job", "create-invoice"],
        theme="professional",
        weight=10,
    ),
    BehaviorBundle(
        id="hvac",
        name="HVAC Business",
        description="Installs, service calls and maintenance plans",
        keywords=["hvac", "heating", "cooling", "air conditioning", "ac", "furnace"],
        industries=["trades"],
        features=["job_tracking", "scheduling", "invoicing", "quotes", "inventory", "reminders", "dashboard"],
        entities=["client", "job", "quote", "invoice", "material", "appointment"],
        workflows=["create-job", "complete-job", "create-invoice", "schedule-maintenance"],
        theme="professional",
        weight=10,
    ),
    BehaviorBundle(
        id="contractor",
        name="General Contractor",
        description="Projects, estimates and paperwork for builders",
        keywords=["contractor", "construction", "remodel", "renovation", "building"],
        industries=["trades", "construction"],
        features=["job_tracking", "scheduling", "invoicing", "quotes", "documents", "dashboard"],
        entities=["client", "project", "quote", "invoice", "document"],
        workflows=["create-project", "update-project", "create-invoice"],
        theme="professional",
        weight=9,
    ),
    # Healthcare
    BehaviorBundle(
        id="medical-practice",
        name="Medical Practice",
        description="Patient scheduling and records for clinics",
        keywords=["doctor", "medical", "clinic", "patient", "healthcare", "physician"],
        industries=["healthcare"],
        features=["appointments", "calendar", "reminders", "documents", "messaging", "dashboard"],
        entities=["patient", "appointment", "document", "invoice"],
        workflows=["book-appointment", "send-reminder", "create-invoice"],
        theme="professional",
        weight=9,
    ),
    BehaviorBundle(
        id="dental",
        name="Dental Practice",
        description="Appointments, recalls and billing for dentists",
        keywords=["dentist", "dental", "teeth", "orthodontist"],
        industries=["healthcare"],
        features=["appointments", "calendar", "reminders", "documents", "invoicing", "dashboard"],
        entities=["patient", "appointment", "document", "invoice"],
        workflows=["book-appointment", "send-reminder"],
        theme="professional",
        weight=10,
    ),
    BehaviorBundle(
        id="therapy",
        name="Therapy Practice",
        description="Sessions, notes and billing for therapists",
        keywords=["therapist", "therapy", "counselor", "psychologist", "mental health"],
        industries=["healthcare"],
        features=["appointments", "calendar", "reminders", "documents", "invoicing"],
        entities=["client", "appointment", "document", "invoice"],
        workflows=["book-appointment", "send-reminder"],
        theme="minimal",
        weight=10,
    ),
    # Fitness
    BehaviorBundle(
        id="personal-trainer",
        name="Personal Trainer",
        description="Client sessions and progress for trainers",
        keywords=["trainer", "personal training", "fitness", "workout", "exercise", "gym"],
        industries=["fitness"],
        features=["appointments", "calendar", "status_tracking", "invoicing", "messaging", "dashboard"],
        entities=["client", "appointment", "invoice"],
        workflows=["book-session", "send-reminder", "create-invoice"],
        theme="bold",
        weight=9,
    ),
    # Professional services
    BehaviorBundle(
        id="consulting",
        name="Consulting Business",
        description="Engagements, deliverables and invoicing",
        keywords=["consultant", "consulting", "advisor", "strategy"],
        industries=["professional"],
        features=["job_tracking", "invoicing", "documents", "calendar", "dashboard"],
        entities=["client", "project", "invoice", "document"],
        workflows=["create-project", "create-invoice", "send-invoice"],
        theme="professional",
        weight=8,
    ),
    BehaviorBundle(
        id="law-firm",
        name="Law Firm",
        description="Cases, documents and billable time",
        keywords=["lawyer", "attorney", "legal", "law firm", "case"],
        industries=["professional"],
        features=["job_tracking", "documents", "calendar", "invoicing", "dashboard"],
        entities=["client", "project", "document", "invoice"],
        workflows=["create-case", "update-case", "create-invoice"],
        theme="professional",
        weight=9,
    ),
    # Creative
    BehaviorBundle(
        id="photography",
        name="Photography Business",
        description="Shoots, galleries and client billing",
        keywords=["photographer", "photography", "photo", "shoot", "session", "wedding"],
        industries=["creative"],
        features=["appointments", "invoicing", "quotes", "documents", "calendar", "file_upload"],
        entities=["client", "appointment", "quote", "invoice", "document"],
        workflows=["book-session", "create-invoice", "send-invoice"],
        theme="modern",
        weight=9,
    ),
    BehaviorBundle(
        id="design-studio",
        name="Design Studio",
        description="Creative projects from brief to invoice",
        keywords=["designer", "design", "graphic", "branding", "creative", "agency"],
        industries=["creative"],
        features=["job_tracking", "invoicing", "quotes", "documents", "calendar", "pipelines"],
        entities=["client", "project", "quote", "invoice"],
        workflows=["create-project", "update-project", "create-invoice"],
        theme="modern",
        weight=8,
    ),
    # Real estate
    BehaviorBundle(
        id="property-manager",
        name="Property Manager",
        description="Rentals, leases and maintenance requests",
        keywords=["property", "landlord", "rental", "tenant", "lease", "rent"],
        industries=["real_estate"],
        features=["status_tracking", "invoicing", "documents", "messaging", "calendar", "dashboard"],
        entities=["property", "client", "invoice", "document"],
        workflows=["collect-rent", "create-lease", "maintenance-request"],
        theme="professional",
        weight=9,
    ),
    BehaviorBundle(
        id="realtor",
        name="Real Estate Agent",
        description="Listings, showings and deal pipeline",
        keywords=["realtor", "real estate agent", "broker", "listing", "showing"],
        industries=["real_estate"],
        features=["status_tracking", "calendar", "documents", "messaging", "pipelines", "dashboard"],
        entities=["client", "property", "appointment", "document"],
        workflows=["schedule-showing", "follow-up", "close-deal"],
        theme="professional",
        weight=9,
    ),
    # Personal
    BehaviorBundle(
        id="todo",
        name="Task Manager",
        description="Simple personal task list",
        keywords=["todo", "task", "tasks", "to-do", "checklist", "personal"],
        industries=["personal"],
        features=["crud", "status_tracking", "reminders"],
        entities=["task"],
        workflows=["create-task", "complete-task"],
        theme="minimal",
        weight=7,
    ),
    BehaviorBundle(
        id="habit-tracker",
        name="Habit Tracker",
        description="Daily habits and streaks",
        keywords=["habit", "habits", "routine", "daily", "tracker", "streak"],
        industries=["personal", "fitness"],
        features=["status_tracking", "reminders", "analytics"],
        entities=["task"],
        workflows=["log-habit", "check-streak"],
        theme="playful",
        weight=8,
    ),
    # Sales
    BehaviorBundle(
        id="crm",
        name="Customer CRM",
        description="Leads, contacts and follow-ups",
        keywords=["crm", "customer", "sales", "leads", "contacts", "pipeline"],
        industries=["services", "professional", "retail"],
        features=["crud", "status_tracking", "pipelines", "messaging", "calendar", "dashboard"],
        entities=["client", "project", "appointment"],
        workflows=["create-lead", "convert-lead", "follow-up"],
        theme="professional",
        weight=7,
    ),
    # Generic
    BehaviorBundle(
        id="service-business",
        name="Service Business",
        description="General service business management",
        keywords=["service", "business", "clients", "appointments"],
        industries=["services"],
        features=["crud", "appointments", "invoicing", "calendar", "dashboard"],
        entities=["client", "appointment", "invoice"],
        workflows=["book-appointment", "create-invoice"],
        theme="professional",
        weight=5,
    ),
]


BUNDLES_BY_ID: dict[str, BehaviorBundle] = {b.id: b for b in BEHAVIOR_BUNDLES}


__all__ = [
    "BEHAVIOR_BUNDLES",
    "BUNDLES_BY_ID",
]
