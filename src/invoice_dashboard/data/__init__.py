"""
Seed data for the Invoice Dashboard.

This package contains fixture data used by MemoryInvoiceService for
development and demonstrations without a backend.

Modules:
- seed_invoices: Pre-populated InvoiceDetail records
"""
