"""Unit tests for Material.

Tests cover:
- Default coefficients
- Validation of negative and non-positive parameters
- Deriving variants with with_changes
- Dictionary export and import
- The glass preset
"""

import pytest


class TestMaterialDefaults:
    """Tests for default material values."""

    def test_defaults(self):
        """Test the default Phong coefficients."""
        from src.whitted.core.color import Color
        from src.whitted.materials.material import Material

        m = Material()
        assert m.color == Color(1, 1, 1)
        assert m.ambient == 0.1
        assert m.diffuse == 0.9
        assert m.specular == 0.9
        assert m.shininess == 200.0
        assert m.reflective == 0.0
        assert m.transparency == 0.0
        assert m.refractive_index == 1.0
        assert m.pattern is None

    def test_default_color_is_shared_white(self):
        """Test that the default color comes from a factory, not a class default."""
        from dataclasses import MISSING, fields

        from src.whitted.core.color import WHITE
        from src.whitted.materials.material import Material

        color_field = next(f for f in fields(Material) if f.name == "color")
        assert color_field.default is MISSING
        assert color_field.default_factory() is WHITE
        assert Material().color is WHITE
        assert Material(ambient=0.2).color == WHITE

    def test_is_immutable(self):
        from dataclasses import FrozenInstanceError

        from src.whitted.materials.material import Material

        m = Material()
        with pytest.raises(FrozenInstanceError):
            m.ambient = 0.5


class TestMaterialValidation:
    """Tests for parameter validation."""

    @pytest.mark.parametrize(
        "name", ["ambient", "diffuse", "specular", "reflective", "transparency"]
    )
    def test_negative_coefficient_rejected(self, name):
        """Test that negative coefficients raise ValueError."""
        from src.whitted.materials.material import Material

        with pytest.raises(ValueError, match=name):
            Material(**{name: -0.1})

    @pytest.mark.parametrize("name", ["shininess", "refractive_index"])
    def test_non_positive_rejected(self, name):
        from src.whitted.materials.material import Material

        with pytest.raises(ValueError, match=name):
            Material(**{name: 0.0})

    def test_with_changes_is_validated(self):
        from src.whitted.materials.material import Material

        with pytest.raises(ValueError):
            Material().with_changes(diffuse=-1.0)

    def test_with_changes_keeps_other_fields(self):
        """Test that with_changes copies untouched fields."""
        from src.whitted.core.color import Color
        from src.whitted.materials.material import Material

        base = Material(color=Color(1, 0.2, 1), shininess=50.0)
        mirror = base.with_changes(reflective=0.9)
        assert mirror.reflective == 0.9
        assert mirror.color == Color(1, 0.2, 1)
        assert mirror.shininess == 50.0
        assert base.reflective == 0.0


class TestMaterialSerialization:
    """Tests for to_dict/from_dict."""

    def test_to_dict(self):
        from src.whitted.core.color import Color
        from src.whitted.materials.material import Material

        data = Material(color=Color(0.5, 0.25, 1.0), reflective=0.3).to_dict()
        assert data["color"] == [0.5, 0.25, 1.0]
        assert data["reflective"] == 0.3
        assert "pattern" not in data

    def test_from_dict_fills_defaults(self):
        from src.whitted.core.color import Color
        from src.whitted.materials.material import Material

        m = Material.from_dict({"color": [0.1, 0.2, 0.3], "transparency": 0.5})
        assert m.color == Color(0.1, 0.2, 0.3)
        assert m.transparency == 0.5
        assert m.diffuse == 0.9

    def test_from_dict_rejects_unknown_keys(self):
        """Test that unknown keys are reported."""
        from src.whitted.materials.material import Material

        with pytest.raises(ValueError, match="roughness"):
            Material.from_dict({"roughness": 0.4})

    def test_dict_round_trip(self):
        from src.whitted.materials.material import Material, glass

        m = glass()
        assert Material.from_dict(m.to_dict()) == m


class TestGlass:
    """Tests for the glass preset."""

    def test_glass(self):
        from src.whitted.materials.material import glass

        m = glass()
        assert m.transparency == 0.9
        assert m.reflective == 0.9
        assert m.refractive_index == pytest.approx(1.52)
