"""UML Doclet - PlantUML diagrams for generated API documentation."""

__version__ = "3.0.0"
