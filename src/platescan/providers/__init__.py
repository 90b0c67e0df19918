"""
Registry adapters for platescan.

Each provider module implements the PlateProber Protocol:
- VegvesenProber  (Statens vegvesen kjoretoydata lookup)

Add new registries by creating a module and wiring it in factory.make_prober().
"""
