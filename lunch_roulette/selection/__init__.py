"""
Restaurant selection engine.

Responsibilities:
- Narrow provider results with rating / open-now / radius predicates.
- Aggregate candidates found inside user-chosen buildings.
- Draw one candidate with weights that decay with prior picks this session.
- Annotate the pick with a walking distance, falling back to an estimate.
"""
