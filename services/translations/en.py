# -*- coding: utf-8 -*-
"""English translations."""

EN_TRANSLATIONS = {
    # Wizard steps
    "wizard.title": "Create New Tenancy",
    "wizard.step.select_unit_tenant": "Select Unit & Tenant",
    "wizard.step.rent_details": "Rent Details",
    "wizard.step.clauses": "Agreement Clauses",
    "wizard.step.sign_agreement": "Sign Agreement",
    "wizard.step.review": "Review & Create Tenancy",

    # Wizard flow
    "wizard.error.select_unit_tenant": "Please select unit and tenant first",
    "wizard.error.missing_information": "Missing required information",
    "wizard.error.no_agreement": "Create the agreement before continuing",
    "wizard.reset.discarded": "Form reset. Starting from the beginning.",
    "wizard.reset.agreement_not_found": "Agreement not found. Wizard has been reset.",
    "wizard.reset.resource_not_found": "Resource not found. Wizard has been reset.",

    # Agreement
    "agreement.created": "Agreement created successfully!",
    "agreement.create_failed": "Failed to create agreement",
    "agreement.load_failed": "Failed to load agreement",
    "agreement.not_found": "Agreement not found.",
    "agreement.list_failed": "Failed to load agreements",
    "agreement.sign_success": "Agreement signed successfully!",
    "agreement.sign_failed": "Failed to sign agreement",
    "agreement.status.fully_signed": "This agreement has been fully signed",
    "agreement.status.already_signed": "You have already signed this agreement",
    "agreement.status.review_before_signing": "Please review the agreement carefully before signing",
    "agreement.confirm.title": "Confirm Signature",
    "agreement.confirm.body": (
        "You are about to electronically sign this agreement. This action is legally "
        "binding and cannot be undone. Are you sure you want to proceed?"
    ),

    # Signature policy
    "signature.error.missing_consent": "Please confirm that you have read and understood the agreement",
    "signature.error.name_mismatch": "Please enter your full name exactly as shown to sign the agreement",

    # Tenancy
    "tenancy.created": "Tenancy created successfully!",
    "tenancy.create_failed": "Failed to create tenancy",

    # Lookups
    "units.load_failed": "Failed to load units",
    "tenants.load_failed": "Failed to load tenants",

    # Rent / deposit validation
    "validation.rent.amount_positive": "Rent amount must be greater than 0",
    "validation.rent.cycle": "Payment cycle must be monthly, quarterly or yearly",
    "validation.rent.due_date_day": "Due date day must be between 1 and 28",
    "validation.deposit.amount": "Deposit amount must be 0 or greater",
    "validation.deposit.status": "Deposit status must be upcoming, held, returned or disputed",

    # Clause validation
    "validation.clauses.min_one": "At least one clause is required",
    "validation.clauses.text_required": "Clause {index}: clause text is required",

    # Error Messages - API
    "error.api.connection": "Connection error. Please check your internet connection.",
    "error.api.timeout": "Connection timeout. Please try again.",
    "error.api.not_found": "Resource not found.",
    "error.api.validation": "Validation error:\n{details}",
    "error.api.server": "Server error. Please try again later.",

    # Error Messages - General
    "error.unexpected": "An unexpected error occurred.",
    "validation.check_data": "Please check the entered data",
}
