"""Application-wide constants.

Billing limits and the yard timezone are configured in config.Settings.
"""

# Inventory gate statuses
GATE_STATUS_IN = "IN"
GATE_STATUS_PRE_IN = "PRE-IN"
GATE_STATUS_CANCELLED = "CANCELLED"

# Client filter value meaning "every client"
CLIENT_FILTER_ALL = "all"

# Rate sources
RATE_SOURCE_CLIENT = "client"
RATE_SOURCE_DEFAULT = "default"
RATE_SOURCE_NONE = "none"

# Billing warning codes
WARNING_MALFORMED_INTERVAL = "MALFORMED_INTERVAL"
WARNING_RATE_NOT_CONFIGURED = "RATE_NOT_CONFIGURED"
WARNING_RECORD_LIMIT_REACHED = "RECORD_LIMIT_REACHED"

# Audit actions and modules
AUDIT_ACTION_BILLING = "BILLING"
AUDIT_ACTION_REPORTS = "REPORTS"
AUDIT_MODULE_BILLING = "BILLING"
DEFAULT_REQUESTED_BY = "system"

# Date formats
DATE_FORMAT_ISO = "%Y-%m-%d"

# Export
EXPORT_FILENAME_TEMPLATE = "Billing_Report_{start}_to_{end}.csv"
EXPORT_IN_YARD_LABEL = "In Yard"
EXPORT_HEADERS = [
    "Container No",
    "Size",
    "Client Code",
    "Client Name",
    "Date In",
    "Date Out",
    "Storage Days",
    "Free Days",
    "Billable Days",
    "Storage Rate",
    "Storage Charges",
    "Handling Rate",
    "Handling IN",
    "Handling OUT",
    "Total Handling",
    "Total Amount",
]

