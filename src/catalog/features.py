"""
Feature catalog.

Every capability the feature detector knows about, with the keywords, semantic
intents and industry categories that make it score.
"""

from src.catalog.schema import FeatureDefinition, Priority, SemanticIntent

I = SemanticIntent
P = Priority


FEATURES: list[FeatureDefinition] = [
    # -------------------------------------------------------------------------
    # Data management
    # -------------------------------------------------------------------------
    FeatureDefinition(
        id="crud",
        name="Data Management",
        keywords=["add", "create", "edit", "update", "delete", "remove", "manage", "record", "entry"],
        intents=[I.MANAGING, I.ORGANIZING],
        default_priority=P.ESSENTIAL,
        description="Create, read, update, and delete records",
    ),
    FeatureDefinition(
        id="search",
        name="Search",
        keywords=["search", "find", "lookup", "query", "filter by"],
        intents=[I.ORGANIZING],
        default_priority=P.IMPORTANT,
        description="Search and find records quickly",
    ),
    FeatureDefinition(
        id="filtering",
        name="Filtering",
        keywords=["filter", "narrow", "show only", "by status", "by date", "by type"],
        intents=[I.ORGANIZING],
        default_priority=P.IMPORTANT,
        description="Filter data by various criteria",
    ),
    FeatureDefinition(
        id="sorting",
        name="Sorting",
        keywords=["sort", "order", "arrange", "newest", "oldest", "alphabetical"],
        intents=[I.ORGANIZING],
        default_priority=P.NICE_TO_HAVE,
        description="Sort data in different orders",
    ),
    FeatureDefinition(
        id="bulk_actions",
        name="Bulk Actions",
        keywords=["bulk", "batch", "multiple", "all at once", "mass update"],
        intents=[I.MANAGING],
        default_priority=P.NICE_TO_HAVE,
        description="Perform actions on multiple records at once",
    ),
    # -------------------------------------------------------------------------
    # Scheduling
    # -------------------------------------------------------------------------
    FeatureDefinition(
        id="calendar",
        name="Calendar View",
        keywords=["calendar", "schedule view", "month view", "week view", "day view"],
        intents=[I.SCHEDULING],
        default_priority=P.IMPORTANT,
        description="Visual calendar display of events",
    ),
    FeatureDefinition(
        id="appointments",
        name="Appointment Booking",
        keywords=["appointment", "booking", "schedule", "reserve", "slot", "availability"],
        intents=[I.SCHEDULING],
        industries=["healthcare", "services", "fitness", "professional"],
        default_priority=P.ESSENTIAL,
        description="Book and manage appointments",
    ),
    FeatureDefinition(
        id="reminders",
        name="Reminders",
        keywords=["reminder", "remind", "alert", "notification", "before", "upcoming"],
        intents=[I.SCHEDULING, I.COMMUNICATING],
        default_priority=P.IMPORTANT,
        description="Automated reminders for upcoming events",
    ),
    FeatureDefinition(
        id="recurring_events",
        name="Recurring Events",
        keywords=["recurring", "repeat", "weekly", "monthly", "daily", "every"],
        intents=[I.SCHEDULING],
        dependencies=["calendar"],
        default_priority=P.NICE_TO_HAVE,
        description="Support for repeating events",
    ),
    # -------------------------------------------------------------------------
    # Communication
    # -------------------------------------------------------------------------
    FeatureDefinition(
        id="messaging",
        name="In-App Messaging",
        keywords=["message", "chat", "communicate", "send", "inbox", "conversation"],
        intents=[I.COMMUNICATING],
        default_priority=P.IMPORTANT,
        description="Send and receive messages within the app",
    ),
    FeatureDefinition(
        id="notifications",
        name="Push Notifications",
        keywords=["notify", "notification", "push", "alert", "update"],
        intents=[I.COMMUNICATING],
        default_priority=P.IMPORTANT,
        description="Send push notifications to users",
    ),
    FeatureDefinition(
        id="sms",
        name="SMS Integration",
        keywords=["sms", "text message", "text", "mobile"],
        intents=[I.COMMUNICATING],
        default_priority=P.NICE_TO_HAVE,
        description="Send SMS text messages",
    ),
    FeatureDefinition(
        id="email",
        name="Email Integration",
        keywords=["email", "mail", "send email", "email notification"],
        intents=[I.COMMUNICATING],
        default_priority=P.IMPORTANT,
        description="Send and track emails",
    ),
    # -------------------------------------------------------------------------
    # Billing & payments
    # -------------------------------------------------------------------------
    FeatureDefinition(
        id="invoicing",
        name="Invoicing",
        keywords=["invoice", "bill", "billing", "charge", "payment request"],
        intents=[I.BILLING],
        industries=["trades", "professional", "creative", "services"],
        default_priority=P.ESSENTIAL,
        description="Create and send invoices",
    ),
    FeatureDefinition(
        id="payments",
        name="Payment Processing",
        keywords=["payment", "pay", "collect", "stripe", "credit card", "accept payment"],
        intents=[I.BILLING],
        dependencies=["invoicing"],
        default_priority=P.IMPORTANT,
        description="Accept online payments",
    ),
    FeatureDefinition(
        id="quotes",
        name="Quotes & Estimates",
        keywords=["quote", "estimate", "proposal", "bid", "pricing"],
        intents=[I.BILLING],
        industries=["trades", "construction", "creative", "professional"],
        default_priority=P.IMPORTANT,
        description="Create quotes and estimates for clients",
    ),
    FeatureDefinition(
        id="subscriptions",
        name="Subscription Billing",
        keywords=["subscription", "recurring billing", "monthly payment", "membership fee"],
        intents=[I.BILLING],
        dependencies=["payments"],
        default_priority=P.NICE_TO_HAVE,
        description="Manage recurring subscription payments",
    ),
    # -------------------------------------------------------------------------
    # Documents
    # -------------------------------------------------------------------------
    FeatureDefinition(
        id="documents",
        name="Document Management",
        keywords=["document", "file", "attachment", "contract", "agreement", "pdf"],
        intents=[I.ORGANIZING],
        default_priority=P.IMPORTANT,
        description="Store and organize documents",
    ),
    FeatureDefinition(
        id="file_upload",
        name="File Uploads",
        keywords=["upload", "attach", "file", "image", "photo", "picture"],
        intents=[I.ORGANIZING],
        default_priority=P.IMPORTANT,
        description="Upload and attach files to records",
    ),
    FeatureDefinition(
        id="signatures",
        name="E-Signatures",
        keywords=["signature", "sign", "e-sign", "docusign", "contract signing"],
        dependencies=["documents"],
        industries=["professional", "real_estate", "trades"],
        default_priority=P.NICE_TO_HAVE,
        description="Collect electronic signatures",
    ),
    FeatureDefinition(
        id="templates",
        name="Document Templates",
        keywords=["template", "form", "standard", "reusable", "preset"],
        dependencies=["documents"],
        default_priority=P.NICE_TO_HAVE,
        description="Create reusable document templates",
    ),
    # -------------------------------------------------------------------------
    # Team & collaboration
    # -------------------------------------------------------------------------
    FeatureDefinition(
        id="user_management",
        name="Multi-User Support",
        keywords=["user", "team", "member", "account", "login", "access"],
        intents=[I.COLLABORATING],
        default_priority=P.IMPORTANT,
        description="Support multiple users with accounts",
    ),
    FeatureDefinition(
        id="roles",
        name="Roles & Permissions",
        keywords=["role", "permission", "access control", "admin", "restricted"],
        intents=[I.COLLABORATING],
        dependencies=["user_management"],
        default_priority=P.IMPORTANT,
        description="Control access with roles and permissions",
    ),
    FeatureDefinition(
        id="assignments",
        name="Task Assignments",
        keywords=["assign", "delegate", "responsible", "owner", "assigned to"],
        intents=[I.COLLABORATING, I.MANAGING],
        dependencies=["user_management"],
        default_priority=P.IMPORTANT,
        description="Assign tasks to team members",
    ),
    FeatureDefinition(
        id="comments",
        name="Comments & Notes",
        keywords=["comment", "note", "annotation", "feedback", "discussion"],
        intents=[I.COLLABORATING, I.COMMUNICATING],
        default_priority=P.NICE_TO_HAVE,
        description="Add comments and notes to records",
    ),
    # -------------------------------------------------------------------------
    # Reporting
    # -------------------------------------------------------------------------
    FeatureDefinition(
        id="dashboard",
        name="Dashboard",
        keywords=["dashboard", "overview", "summary", "at a glance", "home page"],
        intents=[I.REPORTING, I.MONITORING],
        default_priority=P.IMPORTANT,
        description="Visual dashboard with key metrics",
    ),
    FeatureDefinition(
        id="reports",
        name="Reports",
        keywords=["report", "analysis", "breakdown", "summary report"],
        intents=[I.REPORTING],
        default_priority=P.IMPORTANT,
        description="Generate detailed reports",
    ),
    FeatureDefinition(
        id="analytics",
        name="Analytics",
        keywords=["analytics", "statistics", "metrics", "kpi", "performance"],
        intents=[I.REPORTING, I.MONITORING],
        default_priority=P.NICE_TO_HAVE,
        description="Track and analyze key metrics",
    ),
    FeatureDefinition(
        id="exports",
        name="Data Export",
        keywords=["export", "download", "csv", "excel", "pdf export"],
        intents=[I.REPORTING],
        default_priority=P.NICE_TO_HAVE,
        description="Export data to various formats",
    ),
    # -------------------------------------------------------------------------
    # Workflow
    # -------------------------------------------------------------------------
    FeatureDefinition(
        id="workflow",
        name="Workflow Automation",
        keywords=["workflow", "automation", "automate", "automatic", "trigger", "when then"],
        intents=[I.AUTOMATING],
        default_priority=P.IMPORTANT,
        description="Automate repetitive tasks",
    ),
    FeatureDefinition(
        id="approvals",
        name="Approval Workflows",
        keywords=["approval", "approve", "review", "sign off", "authorization"],
        intents=[I.AUTOMATING],
        dependencies=["workflow", "user_management"],
        default_priority=P.NICE_TO_HAVE,
        description="Multi-step approval processes",
    ),
    FeatureDefinition(
        id="status_tracking",
        name="Status Tracking",
        keywords=["status", "progress", "stage", "phase", "step", "pipeline"],
        intents=[I.TRACKING, I.MONITORING],
        default_priority=P.IMPORTANT,
        description="Track progress through stages",
    ),
    FeatureDefinition(
        id="pipelines",
        name="Pipeline / Kanban View",
        keywords=["pipeline", "kanban", "board", "columns", "drag and drop", "stages"],
        intents=[I.TRACKING, I.ORGANIZING],
        dependencies=["status_tracking"],
        default_priority=P.IMPORTANT,
        description="Visual pipeline/kanban board",
    ),
    # -------------------------------------------------------------------------
    # Industry-specific
    # -------------------------------------------------------------------------
    FeatureDefinition(
        id="inventory",
        name="Inventory Management",
        keywords=["inventory", "stock", "material", "supply", "parts", "warehouse"],
        intents=[I.TRACKING, I.MANAGING],
        industries=["trades", "retail", "hospitality"],
        default_priority=P.IMPORTANT,
        description="Track inventory and stock levels",
    ),
    FeatureDefinition(
        id="job_tracking",
        name="Job/Project Tracking",
        keywords=["job", "project", "work order", "service call", "ticket"],
        intents=[I.TRACKING, I.MANAGING],
        industries=["trades", "services", "creative"],
        default_priority=P.ESSENTIAL,
        description="Track jobs and projects from start to finish",
    ),
    FeatureDefinition(
        id="client_portal",
        name="Client Portal",
        keywords=["client portal", "customer portal", "self-service", "client access"],
        intents=[I.COLLABORATING],
        default_priority=P.NICE_TO_HAVE,
        description="Client-facing portal for self-service",
    ),
    FeatureDefinition(
        id="booking_widget",
        name="Public Booking Widget",
        keywords=["booking widget", "online booking", "public scheduling", "book online"],
        intents=[I.SCHEDULING],
        dependencies=["appointments"],
        default_priority=P.NICE_TO_HAVE,
        description="Public widget for online bookings",
    ),
]


SUGGESTED_IMPLEMENTATIONS: dict[str, str] = {
    "crud": "Standard list, form, and detail views with create/edit/delete actions",
    "search": "Full-text search with filter chips and autocomplete",
    "calendar": "Monthly calendar view with event details on click",
    "appointments": "Time slot picker with availability checking",
    "invoicing": "Invoice builder with line items, tax calculation, and PDF export",
    "payments": "Stripe integration for card payments",
    "dashboard": "Summary cards with key metrics and recent activity",
    "pipelines": "Drag-and-drop kanban board with status columns",
    "job_tracking": "Job card with timeline, status updates, and attachments",
    "inventory": "Stock levels with low inventory alerts",
}


FEATURES_BY_ID: dict[str, FeatureDefinition] = {f.id: f for f in FEATURES}


__all__ = [
    "FEATURES",
    "FEATURES_BY_ID",
    "SUGGESTED_IMPLEMENTATIONS",
]
