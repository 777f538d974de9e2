"""Assessment Report Service - core reporting package.

Subpackages:
    extraction    path expressions over assessment records
    presentation  value formatting and range classification
    reports       report configuration, assembly and document contract
    artifacts     artifact naming, persistence and listing
    sources       session repository and report configuration registry
    render        HTML and PDF document renderers
"""
