"""Pipeline stages. Each is a pure function over its inputs and the reference tables."""
