# Services package init
"""
MemoPad Backend — Services Layer
==================================

Service Inventory:
    - MemoRepository:   CRUD facade over the memos table (one per request)
    - SummaryProvider:  Abstract interface for AI summaries
    - GeminiService:    SummaryProvider backed by Google Gemini
"""
