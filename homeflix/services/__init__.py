"""
Application services layer (use cases).

Services orchestrate the domain logic to fulfill application use cases:
- ReconciliationService: scan the library and index new files
- CatalogService: browse, search and update user fields of the catalog
- streaming: byte-range parsing and chunked file reads

Services depend on ports (interfaces) from core/, never on concrete
implementations from adapters/.
"""
