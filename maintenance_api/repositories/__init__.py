"""레포지토리 패키지: 파일 저장소 계층.

Repository package: File storage layer.
Resolves per-institution paths and reads/writes whole-collection JSON
documents. Business rules live in the service package.
"""
