"""Test the build model and its loader."""
import unittest
from pathlib import Path

from pyeda.inter import expr, exprvar  # type: ignore

from pssmap.base.presence_condition import get_variable_names
from pssmap.model.build_model import (
    BuildModel,
    create_build_model_from_yaml_doc,
    load_build_model,
)
from pssmap.utils.exceptions import MalformedEntryError
from tests.test_utils import TEST_INPUTS_DIR


class TestBuildModel(unittest.TestCase):
    """Test the presence conditions of source files."""

    def test_lookup(self):
        build_model = BuildModel({Path("main.c"): exprvar("CONFIG_A")})
        build_model.add(Path("util.c"), expr(True))

        self.assertEqual(len(build_model), 2)
        self.assertEqual(build_model.get_pc(Path("main.c")), exprvar("CONFIG_A"))
        self.assertIn("util.c", build_model)
        self.assertIsNone(build_model.get_pc(Path("missing.c")))
        self.assertNotIn("missing.c", build_model)

    def test_yaml_doc(self):
        """Files without a condition are not part of the build model."""
        build_model = create_build_model_from_yaml_doc({
            'files': {
                'src/a.c': "CONFIG_A && MODE",
                'src/b.c': True,
                'src/c.c': None
            }
        })

        self.assertEqual(len(build_model), 2)
        condition = build_model.get_pc(Path("src/a.c"))
        assert condition is not None
        self.assertEqual(get_variable_names(condition), {"CONFIG_A", "MODE"})
        self.assertEqual(build_model.get_pc(Path("src/b.c")), expr(True))
        self.assertIsNone(build_model.get_pc(Path("src/c.c")))

    def test_load_calculator(self):
        build_model = load_build_model(
            TEST_INPUTS_DIR / "calculator" / "build_model.yaml"
        )

        self.assertEqual(build_model.get_pc(Path("main/main.c")), expr(True))

    def test_files_must_be_a_mapping(self):
        with self.assertRaises(MalformedEntryError):
            create_build_model_from_yaml_doc({'files': ["src/a.c"]})
