"""Tests for the archetype table."""

import pytest

from deploy_setup.core.app_type_registry import (
    AppTypeRegistry,
    TemplateCategory,
    app_type_registry,
)
from deploy_setup.models.project import Language, ProjectType


class TestAppTypeRegistry:
    def test_every_project_type_registered(self):
        assert set(app_type_registry.all()) == set(ProjectType)

    def test_lookup_by_string(self):
        config = app_type_registry.get("django")

        assert config.type == ProjectType.DJANGO
        assert config.build_cmd == "python manage.py collectstatic --noinput"
        assert config.entry_file == "manage.py"

    def test_unknown_type(self):
        with pytest.raises(ValueError, match="Unsupported app type"):
            app_type_registry.get("rails")

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            app_type_registry.all()[ProjectType.FLASK] = None

    @pytest.mark.parametrize(
        "project_type, category",
        [
            (ProjectType.FLASK, TemplateCategory.PYTHON),
            (ProjectType.DJANGO, TemplateCategory.PYTHON),
            (ProjectType.FASTAPI, TemplateCategory.PYTHON),
            (ProjectType.NESTJS, TemplateCategory.NODE),
            (ProjectType.NEXTJS, TemplateCategory.NODE),
            (ProjectType.NUXTJS, TemplateCategory.NODE),
            (ProjectType.VUE_SPA, TemplateCategory.SPA),
            (ProjectType.REACT_SPA, TemplateCategory.SPA),
        ],
    )
    def test_template_category(self, project_type, category):
        assert app_type_registry.get(project_type).template_category == category

    def test_spa_types(self):
        spas = [t for t, config in app_type_registry.all().items() if config.is_spa]

        assert sorted(spas) == sorted([ProjectType.VUE_SPA, ProjectType.REACT_SPA])

    def test_language_for(self):
        assert app_type_registry.language_for(ProjectType.NUXTJS) == Language.NODE
        assert app_type_registry.language_for("fastapi") == Language.PYTHON

    def test_new_instance_matches_singleton(self):
        assert AppTypeRegistry().list_types() == app_type_registry.list_types()
