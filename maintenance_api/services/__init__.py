"""서비스 패키지: 비즈니스 로직 계층.

Service package: Business logic layer.
Services load collections through the JSON store, apply transitions and
persist the result. Routers never touch files directly.
"""
