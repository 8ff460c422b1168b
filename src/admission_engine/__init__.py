"""
Admission Engine - Admissions Analytics Query Core

A deterministic, in-memory relational engine over applicants, their
applications, specialities and exam results, with the fixed set of
analytical reports the admissions committee relies on.
"""

__version__ = "0.1.0"
__author__ = "Admissions Analytics"
