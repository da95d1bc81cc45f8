"""정비 요청 추적 백엔드 패키지.

Maintenance request tracking backend. Each institution keeps its own
JSON collections and media directory under ``DATA_DIR/institutions``.
"""
