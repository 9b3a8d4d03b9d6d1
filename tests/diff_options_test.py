import sys
import os
import pytest
from pydantic import ValidationError
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from core.diff_options import DiffOptions


def test_defaults():
    options = DiffOptions()
    assert options.include_aa is False
    assert options.alpha == 0.1
    assert options.aa_color == (255, 255, 0)
    assert options.diff_color == (255, 0, 0)
    assert options.diff_color_alt is None
    assert options.diff_mask is False

def test_validate_coerces_colors():
    options = DiffOptions.model_validate({'diff_color': [0, 128, 255], 'alpha': '0.5'})
    assert options.diff_color == (0, 128, 255)
    assert options.alpha == 0.5

def test_unknown_keys_rejected():
    with pytest.raises(ValidationError, match='threshold'):
        DiffOptions.model_validate({'threshold': 0.2})

def test_dump_round_trip():
    options = DiffOptions(diff_color_alt=(0, 0, 255), diff_mask=True)
    assert DiffOptions.model_validate(options.model_dump()) == options

@pytest.mark.parametrize('kwargs', [
    {'alpha': 1.5},
    {'alpha': -0.1},
    {'aa_color': (255, 255)},
    {'diff_color': (256, 0, 0)},
    {'diff_color_alt': 'red'},
])
def test_invalid_values(kwargs):
    with pytest.raises(ValidationError):
        DiffOptions(**kwargs)

def test_validation_errors_are_value_errors():
    with pytest.raises(ValueError):
        DiffOptions(alpha=2)

def test_color_for():
    options = DiffOptions()
    assert options.color_for(-10.0) == (255, 0, 0)
    options = DiffOptions(diff_color_alt=(0, 255, 0))
    assert options.color_for(-10.0) == (0, 255, 0)
    assert options.color_for(10.0) == (255, 0, 0)
