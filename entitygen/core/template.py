"""Template rendering for entity source files."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, TemplateSyntaxError

from entitygen.core.descriptor import EntityDescriptor

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
ENTITY_TEMPLATE = "entity.java.j2"


def table_arguments(entity: EntityDescriptor) -> str:
    """Attributes of the @Table annotation: name and unique constraint groups."""
    arguments = []
    if entity.table_name:
        arguments.append(f'name = "{entity.table_name}"')
    if entity.unique_constraints:
        groups = []
        for group in entity.unique_constraints:
            columns = ", ".join(f'"{column}"' for column in group)
            groups.append(f"@UniqueConstraint(columnNames = {{{columns}}})")
        arguments.append(f"uniqueConstraints = {{{', '.join(groups)}}}")
    return ", ".join(arguments)


class EntityRenderer:
    """Renderer turning entity descriptors into Java source text."""

    def __init__(self, template_dir: str | Path | None = None, template_name: str = ENTITY_TEMPLATE):
        """Initialize template environment.

        Args:
            template_dir: Directory holding templates (defaults to the bundled ones)
            template_name: Entity template file name
        """
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir or TEMPLATE_DIR)),
            # Generating Java, not HTML
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.template_name = template_name

    def render(self, entity: EntityDescriptor) -> str:
        """Render one entity descriptor.

        Args:
            entity: Descriptor to render

        Returns:
            Java source text

        Raises:
            ValueError: If the template is missing or has syntax errors
        """
        try:
            template = self.env.get_template(self.template_name)
        except TemplateSyntaxError as e:
            raise ValueError(f"Template syntax error: {e}") from e
        except TemplateNotFound as e:
            raise ValueError(f"Template not found: {e}") from e
        return template.render(entity=entity, table_arguments=table_arguments)

    def file_path(self, entity: EntityDescriptor) -> str:
        """Relative output path of an entity (``com/example/Book.java``)."""
        package_path = "/".join(part for part in entity.package_name.split(".") if part)
        if package_path:
            return f"{package_path}/{entity.class_name}.java"
        return f"{entity.class_name}.java"
