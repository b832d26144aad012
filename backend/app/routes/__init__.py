# Routes package init
"""
MemoPad Backend — API Routes Package
======================================

Route Inventory:
    - memos.py:      GET/POST     /api/memos
                     GET          /api/memos/count
                     POST         /api/memos/seed
                     GET/PUT/DEL  /api/memos/{id}
                     DELETE       /api/memos          (clear all)
    - summarize.py:  POST         /api/summarize
    - health.py:     GET          /health

Routes handle HTTP concerns only and delegate to services.
"""
