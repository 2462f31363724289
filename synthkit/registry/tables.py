"""Static lookup tables backing the business type registry.

Amounts are integer cents. Every per-type table has an entry for each
canonical business type plus ``default``, which is used for unknown keys.
"""

from __future__ import annotations

DEFAULT_TYPE = "default"

CANONICAL_TYPES = (
    "checkout-ecommerce",
    "b2b-saas-subscriptions",
    "food-delivery-platform",
    "consumer-fitness-app",
    "b2b-invoicing",
    "property-management-platform",
    "creator-platform",
    "donation-marketplace",
)

# Legacy keys and demo persona names map onto canonical types
ALIASES = {
    "saas": "b2b-saas-subscriptions",
    "ecommerce": "checkout-ecommerce",
    "marketplace": "creator-platform",
    "modaic": "checkout-ecommerce",
    "stratus": "b2b-saas-subscriptions",
    "forksy": "food-delivery-platform",
    "pulseon": "consumer-fitness-app",
    "procura": "b2b-invoicing",
    "mindora": "consumer-fitness-app",
    "keynest": "property-management-platform",
    "fluxly": "creator-platform",
    "brightfund": "donation-marketplace",
}

B2B_TYPES = frozenset(
    {"b2b-saas-subscriptions", "b2b-invoicing", "property-management-platform"}
)

AMOUNT_RANGES = {
    "checkout-ecommerce": {
        "subscription": (2000, 20000),
        "one_time": (1000, 50000),
    },
    "b2b-saas-subscriptions": {
        "subscription": (1000, 50000),
        "one_time": (500, 10000),
    },
    "food-delivery-platform": {
        "subscription": (500, 10000),
        "one_time": (200, 20000),
    },
    "consumer-fitness-app": {
        "subscription": (2000, 20000),
        "one_time": (1000, 30000),
    },
    "b2b-invoicing": {
        "subscription": (0, 0),
        "one_time": (5000, 100000),
    },
    "property-management-platform": {
        "subscription": (0, 0),
        "one_time": (10000, 200000),
    },
    "creator-platform": {
        "subscription": (500, 10000),
        "one_time": (200, 20000),
    },
    "donation-marketplace": {
        "subscription": (0, 0),
        "one_time": (500, 50000),
    },
    DEFAULT_TYPE: {
        "subscription": (1000, 30000),
        "one_time": (500, 30000),
    },
}

PLAN_NAMES = {
    "checkout-ecommerce": ("Basic", "Standard", "Premium", "Pro", "Growth", "Scale"),
    "b2b-saas-subscriptions": (
        "Starter",
        "Professional",
        "Business",
        "Enterprise",
        "Team",
        "Individual",
    ),
    "food-delivery-platform": ("Basic", "Plus", "Premium", "Family", "Corporate"),
    "consumer-fitness-app": ("Basic", "Premium", "Elite", "Family", "Student"),
    "b2b-invoicing": ("Basic", "Professional", "Enterprise"),
    "property-management-platform": ("Basic", "Professional", "Enterprise"),
    "creator-platform": ("Creator", "Pro", "Business", "Enterprise"),
    "donation-marketplace": ("Basic", "Plus", "Premium"),
    DEFAULT_TYPE: ("Starter", "Professional", "Business", "Enterprise"),
}

DESCRIPTIONS = {
    "checkout-ecommerce": (
        "Premium cotton t-shirt with modern fit",
        "Designer denim jacket with vintage wash",
        "Elegant silk blouse for professional wear",
        "Comfortable sneakers with memory foam",
        "Classic leather handbag with gold hardware",
        "Seasonal collection dress with floral print",
        "Athletic performance shorts with moisture-wicking",
        "Business casual button-down shirt",
        "Winter coat with down insulation",
        "Summer sandals with arch support",
    ),
    "b2b-saas-subscriptions": (
        "Professional plan with advanced analytics",
        "Team collaboration tools and integrations",
        "Enterprise security and compliance features",
        "Custom API access and webhooks",
        "Priority support and dedicated account manager",
        "Advanced reporting and data export",
        "Multi-user workspace management",
        "Custom branding and white-label options",
        "Advanced workflow automation",
        "Dedicated infrastructure and SLA",
    ),
    "food-delivery-platform": (
        "Fresh Mediterranean bowl with quinoa",
        "Artisan pizza with local ingredients",
        "Gourmet burger with truffle fries",
        "Healthy smoothie bowl with acai",
        "Authentic Thai curry with jasmine rice",
        "Farm-to-table salad with seasonal vegetables",
        "Handcrafted pasta with house-made sauce",
        "Grilled salmon with roasted vegetables",
        "Vegetarian wrap with hummus and sprouts",
        "Decadent chocolate dessert with berries",
    ),
    "consumer-fitness-app": (
        "Monthly unlimited workout access",
        "Personal training session package",
        "Nutrition consultation and meal planning",
        "Group fitness class membership",
        "Recovery and wellness spa treatment",
        "Online yoga and meditation classes",
        "Strength training program with equipment",
        "Cardio HIIT workout sessions",
        "Flexibility and mobility training",
        "Sports-specific conditioning program",
    ),
    "b2b-invoicing": (
        "Medical supplies and equipment order",
        "Pharmaceutical inventory restock",
        "Laboratory testing and analysis",
        "Emergency medical equipment delivery",
        "Specialized healthcare consultation",
        "Diagnostic imaging services",
        "Surgical instrument sterilization",
        "Patient care monitoring systems",
        "Medical waste disposal services",
        "Healthcare facility maintenance",
    ),
    "property-management-platform": (
        "Monthly rent payment for 2-bedroom apartment",
        "Security deposit for commercial space",
        "Property management service fee",
        "Maintenance and repair service",
        "Lease renewal and processing fee",
        "Utility bill payment and management",
        "Property insurance premium",
        "Landscaping and groundskeeping",
        "Emergency repair and maintenance",
        "Tenant screening and background check",
    ),
    "creator-platform": (
        "Monthly supporter membership",
        "Exclusive behind-the-scenes content",
        "Digital art print download",
        "Online course with lifetime access",
        "Live workshop ticket",
        "Sponsored shout-out package",
        "Premium newsletter subscription",
        "Custom commission request",
        "Early access to new releases",
        "Merchandise bundle",
    ),
    "donation-marketplace": (
        "General fund donation for community programs",
        "Emergency relief fund contribution",
        "Educational scholarship fund donation",
        "Environmental conservation project support",
        "Healthcare access initiative funding",
        "Food security and hunger relief",
        "Housing assistance and shelter support",
        "Youth development and mentorship",
        "Senior care and support services",
        "Disaster response and recovery",
    ),
}
DESCRIPTIONS[DEFAULT_TYPE] = DESCRIPTIONS["checkout-ecommerce"]

FIRST_NAMES = (
    "Emma", "Liam", "Olivia", "Noah", "Ava", "William", "Sophia", "James",
    "Isabella", "Benjamin", "Charlotte", "Lucas", "Amelia", "Henry", "Mia",
    "Alexander", "Harper", "Mason", "Evelyn", "Michael", "Abigail", "Ethan",
    "Emily", "Daniel", "Elizabeth", "Jacob", "Sofia", "Logan", "Avery",
    "Jackson", "Ella", "Levi", "Madison", "Sebastian", "Scarlett", "Mateo",
    "Victoria", "Jack", "Aria", "Owen", "Grace", "Theodore", "Chloe", "Aiden",
    "Camila", "Samuel", "Penelope", "Joseph", "Riley", "John", "Priya",
    "Ahmed", "Carlos", "Maria", "Wei", "Yuki", "Min-jun", "Fatima", "Arjun",
    "Lucia",
)

LAST_NAMES = (
    "Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller",
    "Davis", "Rodriguez", "Martinez", "Hernandez", "Lopez", "Gonzalez",
    "Wilson", "Anderson", "Thomas", "Taylor", "Moore", "Jackson", "Martin",
    "Lee", "Perez", "Thompson", "White", "Harris", "Sanchez", "Clark",
    "Ramirez", "Lewis", "Robinson", "Walker", "Young", "Allen", "King",
    "Wright", "Scott", "Torres", "Nguyen", "Hill", "Flores", "Green", "Adams",
    "Nelson", "Baker", "Hall", "Rivera", "Campbell", "Mitchell", "Carter",
    "Roberts", "Chen", "Patel", "Kim", "Tanaka", "Schmidt", "Rossi",
    "Dubois", "Ivanov", "Hassan", "Park",
)

COMPANY_PREFIXES = {
    "b2b-saas-subscriptions": (
        "CloudSync", "DataFlow", "SecureBridge", "TechFlow", "InnovateLab",
        "DigitalCore", "SmartBridge", "NextGen", "FutureTech", "CyberFlow",
    ),
    "b2b-invoicing": (
        "InvoiceFlow", "PaymentBridge", "FinanceCore", "BillingSync",
        "AccountFlow", "MoneyBridge", "CashFlow", "RevenueCore", "ProfitSync",
        "FinancialBridge",
    ),
    "property-management-platform": (
        "PropertyFlow", "RentalBridge", "RealEstateCore", "HousingSync",
        "TenantBridge", "LeaseFlow", "PropertyCore", "RentalSync",
        "HousingBridge", "TenantFlow",
    ),
    DEFAULT_TYPE: (
        "Quantum", "Neural", "Synapse", "Catalyst", "Momentum", "Velocity",
        "Nexus", "Vertex", "Apex", "Summit", "Global", "Dynamic", "Agile",
        "Precision", "Integrated", "Modern",
    ),
}

COMPANY_SUFFIXES = {
    "b2b-saas-subscriptions": (
        "Technologies", "Solutions", "Systems", "Software", "Platform",
        "Services", "Consulting", "Partners", "Group", "Corp",
    ),
    "b2b-invoicing": (
        "Solutions", "Systems", "Services", "Consulting", "Partners", "Group",
        "Corp", "Management", "Administration", "Operations",
    ),
    "property-management-platform": (
        "Management", "Services", "Solutions", "Systems", "Partners", "Group",
        "Corp", "Consulting", "Administration", "Operations",
    ),
    DEFAULT_TYPE: (
        "Technologies", "Solutions", "Systems", "Labs", "Works", "Analytics",
        "Network", "Partners", "Group", "Corp",
    ),
}

CONSUMER_EMAIL_DOMAINS = (
    "gmail.com",
    "yahoo.com",
    "hotmail.com",
    "outlook.com",
    "icloud.com",
    "protonmail.com",
)

BUSINESS_EMAIL_LOCALS = ("billing", "accounts", "finance", "admin", "ops")

# City and state tuples are index-paired
CITIES = (
    "New York", "Los Angeles", "Chicago", "Houston", "Phoenix",
    "Philadelphia", "San Antonio", "San Diego", "Dallas", "San Jose",
    "Austin", "Jacksonville", "Fort Worth", "Columbus", "Charlotte",
    "San Francisco", "Indianapolis", "Seattle", "Denver", "Washington",
    "Boston", "El Paso", "Nashville", "Detroit", "Oklahoma City", "Portland",
    "Las Vegas", "Memphis", "Louisville", "Baltimore", "Milwaukee",
    "Albuquerque",
)

STATES = (
    "NY", "CA", "IL", "TX", "AZ", "PA", "TX", "CA", "TX", "CA", "TX", "FL",
    "TX", "OH", "NC", "CA", "IN", "WA", "CO", "DC", "MA", "TX", "TN", "MI",
    "OK", "OR", "NV", "TN", "KY", "MD", "WI", "NM",
)

STREET_NUMBERS = (123, 456, 789, 1001, 2345, 3456, 4567, 5678, 6789, 7890)

STREET_NAMES = (
    "Main", "Oak", "Pine", "Elm", "Maple", "Cedar", "First", "Second", "Park",
    "Washington", "Lincoln", "Jefferson", "Madison", "Franklin",
)

STREET_TYPES = ("St", "Ave", "Rd", "Blvd", "Dr", "Ln", "Way", "Ct")

CARD_BRANDS = ("visa", "mastercard", "amex", "discover")

# Persona fields added to customers. A spec is either a tuple of choices or
# a ("range", low, high) triple for whole-dollar amounts.
CUSTOMER_PROPERTIES = {
    "checkout-ecommerce": {
        "loyalty_tier": ("bronze", "silver", "gold", "platinum"),
        "preferred_category": ("apparel", "footwear", "accessories", "outerwear"),
    },
    "b2b-saas-subscriptions": {
        "industry": ("technology", "healthcare", "finance", "retail", "manufacturing"),
        "company_size": ("1-10", "11-50", "51-200", "201-1000", "1000+"),
        "subscription_tier": ("starter", "professional", "business", "enterprise"),
    },
    "food-delivery-platform": {
        "dietary_preference": ("none", "vegetarian", "vegan", "gluten-free", "halal"),
        "order_frequency": ("occasional", "weekly", "several-per-week", "daily"),
    },
    "consumer-fitness-app": {
        "fitness_level": ("beginner", "intermediate", "advanced", "athlete"),
        "subscription_tier": ("basic", "premium", "elite"),
    },
    "b2b-invoicing": {
        "industry": ("healthcare", "pharmaceuticals", "laboratory", "medical-devices"),
        "payment_terms": ("net-15", "net-30", "net-45", "net-60"),
    },
    "property-management-platform": {
        "property_type": ("apartment", "condo", "single-family", "commercial"),
        "monthly_rent": ("range", 800, 3500),
    },
    "creator-platform": {
        "creator_category": ("art", "music", "education", "gaming", "writing"),
        "membership_level": ("follower", "supporter", "patron", "superfan"),
    },
    "donation-marketplace": {
        "donor_type": ("individual", "recurring", "corporate", "foundation"),
        "total_donated": ("range", 10, 5000),
    },
    DEFAULT_TYPE: {},
}

# Full-scale production volumes (growth stage) shown as dataset metadata
BASE_VOLUMES = {
    "checkout-ecommerce": {"customers": 25000, "subscriptions": 0, "invoices": 25000, "charges": 150000},
    "b2b-saas-subscriptions": {"customers": 5000, "subscriptions": 12000, "invoices": 5000, "charges": 25000},
    "food-delivery-platform": {"customers": 50000, "subscriptions": 0, "invoices": 50000, "charges": 300000},
    "consumer-fitness-app": {"customers": 15000, "subscriptions": 25000, "invoices": 15000, "charges": 75000},
    "b2b-invoicing": {"customers": 3000, "subscriptions": 0, "invoices": 12000, "charges": 15000},
    "property-management-platform": {"customers": 2000, "subscriptions": 0, "invoices": 8000, "charges": 10000},
    "creator-platform": {"customers": 30000, "subscriptions": 0, "invoices": 30000, "charges": 180000},
    "donation-marketplace": {"customers": 20000, "subscriptions": 0, "invoices": 20000, "charges": 120000},
    DEFAULT_TYPE: {"customers": 5000, "subscriptions": 12000, "invoices": 5000, "charges": 25000},
}

# Generated sample sizes (growth stage) used when counts are not given
SAMPLE_COUNTS = {
    "checkout-ecommerce": {"customers": 50, "subscriptions": 0, "invoices": 50, "charges": 300},
    "b2b-saas-subscriptions": {"customers": 50, "subscriptions": 120, "invoices": 50, "charges": 250},
    "food-delivery-platform": {"customers": 100, "subscriptions": 0, "invoices": 100, "charges": 600},
    "consumer-fitness-app": {"customers": 60, "subscriptions": 100, "invoices": 60, "charges": 300},
    "b2b-invoicing": {"customers": 30, "subscriptions": 0, "invoices": 120, "charges": 150},
    "property-management-platform": {"customers": 20, "subscriptions": 0, "invoices": 80, "charges": 100},
    "creator-platform": {"customers": 60, "subscriptions": 0, "invoices": 60, "charges": 360},
    "donation-marketplace": {"customers": 40, "subscriptions": 0, "invoices": 40, "charges": 240},
    DEFAULT_TYPE: {"customers": 50, "subscriptions": 120, "invoices": 50, "charges": 250},
}

# Month-of-year and day-of-week multipliers (Monday first)
SEASONALITY = {
    "checkout-ecommerce": {
        "monthly": (0.8, 0.7, 0.9, 1.0, 1.1, 1.2, 1.0, 0.9, 1.1, 1.0, 1.3, 1.5),
        "weekday": (0.8, 0.9, 1.0, 1.1, 1.2, 1.0, 0.7),
    },
    "b2b-saas-subscriptions": {
        "monthly": (1.1, 0.9, 1.2, 0.8, 0.9, 1.0, 0.7, 0.8, 1.1, 1.0, 1.2, 1.3),
        "weekday": (1.1, 1.0, 1.0, 1.0, 1.2, 0.9, 0.6),
    },
    "food-delivery-platform": {
        "monthly": (1.2, 1.0, 1.1, 1.0, 1.1, 1.0, 0.9, 0.9, 1.0, 1.0, 1.1, 1.2),
        "weekday": (1.0, 1.0, 1.0, 1.0, 1.2, 1.3, 1.1),
    },
    "consumer-fitness-app": {
        "monthly": (1.3, 0.8, 0.9, 1.0, 1.1, 1.0, 0.9, 0.8, 0.9, 1.0, 0.9, 1.2),
        "weekday": (1.0, 1.0, 1.0, 1.0, 1.0, 1.2, 1.1),
    },
    "b2b-invoicing": {
        "monthly": (1.2, 0.9, 1.1, 0.8, 0.9, 1.0, 0.7, 0.8, 1.1, 1.0, 1.2, 1.3),
        "weekday": (1.1, 1.0, 1.0, 1.0, 1.2, 0.9, 0.6),
    },
    "property-management-platform": {
        "monthly": (1.0,) * 12,
        "weekday": (1.0,) * 7,
    },
    "creator-platform": {
        "monthly": (1.1, 0.9, 1.0, 1.0, 1.0, 1.0, 0.9, 0.9, 1.0, 1.0, 1.1, 1.2),
        "weekday": (1.0, 1.0, 1.0, 1.0, 1.0, 1.1, 1.0),
    },
    "donation-marketplace": {
        "monthly": (1.2, 0.8, 0.9, 1.0, 1.0, 1.0, 0.9, 0.9, 1.0, 1.0, 1.1, 1.3),
        "weekday": (1.0, 1.0, 1.0, 1.0, 1.0, 1.1, 1.0),
    },
}
SEASONALITY[DEFAULT_TYPE] = SEASONALITY["b2b-saas-subscriptions"]
