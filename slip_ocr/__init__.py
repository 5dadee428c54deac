"""Lao Slip OCR.

Reads payment confirmation slips from Lao mobile-banking and remittance
services with Tesseract OCR and mines the recognized text for the
transaction amount, date, and issuing institution.
"""
