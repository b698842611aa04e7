"""Test module for the ProblemSolutionSpaceMapper."""
import unittest
from pathlib import Path

from pssmap.base.presence_condition import parse_condition
from pssmap.mapping.mapper import (
    ProblemSolutionSpaceMapper,
    compile_variable_regex,
)
from pssmap.mapping.mapping_element import MappingState
from pssmap.model.build_model import load_build_model
from pssmap.model.code_model import load_code_model
from pssmap.model.variability_model import load_variability_model
from pssmap.utils.exceptions import InvalidVariableRegex
from pssmap.utils.settings import pss_cfg
from tests.test_utils import (
    TEST_INPUTS_DIR,
    UnitTestFixtures,
    run_in_test_environment,
)

CALCULATOR_DIR = TEST_INPUTS_DIR / "calculator"


class TestProblemSolutionSpaceMapper(unittest.TestCase):
    """Test the complete mapping of the calculator example."""

    @classmethod
    def setUpClass(cls):
        cls.variability_model_path = CALCULATOR_DIR / "variability_model.yaml"
        cls.constraint_model_path = \
            CALCULATOR_DIR / "variability_model_constraints.yaml"
        cls.code_model = load_code_model(CALCULATOR_DIR / "code_model.yaml")
        cls.build_model = load_build_model(CALCULATOR_DIR / "build_model.yaml")

    def test_compile_variable_regex(self):
        self.assertIsNone(compile_variable_regex(None))
        self.assertIsNone(compile_variable_regex(""))
        pattern = compile_variable_regex("CONFIG_.*")
        assert pattern is not None
        self.assertEqual(pattern.pattern, "CONFIG_.*")

        with self.assertRaises(InvalidVariableRegex):
            compile_variable_regex("(")

    def test_full_mapping(self):
        """Map the calculator with a build model."""
        mapper = ProblemSolutionSpaceMapper("CONFIG_.*")

        with self.assertLogs("pssmap.mapping.mapper", level="INFO") as logs:
            elements = mapper.execute(
                load_variability_model(self.variability_model_path),
                self.code_model, self.build_model
            )

        self.assertIn("Using CONFIG_.* to identify", logs.output[0])
        self.assertIn("Mapping with 4 elements created", logs.output[-1])
        states = {element.variable_name: element.state for element in elements}
        self.assertEqual(
            states, {
                "CONFIG_ADDITION": MappingState.USED,
                "CONFIG_SUBTRACTION": MappingState.USED,
                "CONFIG_DEBUG": MappingState.USED,
                "CONFIG_CALCULATION": MappingState.UNUSED
            }
        )
        for element in elements:
            # the build condition of main.c is constant
            self.assertEqual(len(element.controlled_files), 0)

    def test_constraint_usage_resolves_unmapped(self):
        mapper = ProblemSolutionSpaceMapper("")

        elements = mapper.execute(
            load_variability_model(self.constraint_model_path),
            self.code_model, self.build_model
        )

        states = {element.variable_name: element.state for element in elements}
        self.assertEqual(
            states["CONFIG_CALCULATION"], MappingState.UNMAPPED
        )
        self.assertEqual(states["CONFIG_ADDITION"], MappingState.USED)

    def test_missing_build_model(self):
        """Without build model only the code mapping is created."""
        mapper = ProblemSolutionSpaceMapper("")

        with self.assertLogs("pssmap.mapping.mapper", level="WARNING") as logs:
            elements = mapper.execute(
                load_variability_model(self.variability_model_path),
                self.code_model
            )

        self.assertTrue(
            any(
                "Build model is missing, which may lead to incomplete mapping"
                in line for line in logs.output
            )
        )
        self.assertEqual(len(elements), 4)

    def test_missing_variability_model(self):
        """Without variability model every variable is UNDEFINED."""
        mapper = ProblemSolutionSpaceMapper("")

        with self.assertLogs("pssmap.mapping.mapper", level="ERROR"):
            elements = mapper.execute(None, self.code_model, self.build_model)

        self.assertEqual({element.variable_name for element in elements},
                         {"CONFIG_ADDITION", "CONFIG_SUBTRACTION", "CONFIG_DEBUG"})
        for element in elements:
            self.assertEqual(element.state, MappingState.UNDEFINED)

    def test_build_conditions_map_files(self):
        """Variables of a build condition control the whole file."""
        build_model = load_build_model(CALCULATOR_DIR / "build_model.yaml")
        build_model.add(
            Path("main/main.c"), parse_condition("CONFIG_CALCULATION")
        )
        mapper = ProblemSolutionSpaceMapper("")

        elements = mapper.execute(
            load_variability_model(self.variability_model_path),
            self.code_model, build_model
        )

        calculation = [
            element for element in elements
            if element.variable_name == "CONFIG_CALCULATION"
        ][0]
        self.assertEqual(calculation.state, MappingState.USED)
        self.assertEqual(calculation.controlled_files_str(), "main.c")

    @run_in_test_environment(UnitTestFixtures.CALCULATOR)
    def test_regex_from_config(self):
        """The variable regex defaults to the configured one."""
        pss_cfg()["mapper"]["variable_regex"] = "CONFIG_(ADDITION|DEBUG)"
        mapper = ProblemSolutionSpaceMapper()
        assert mapper.variable_regex is not None
        self.assertEqual(mapper.variable_regex.pattern, "CONFIG_(ADDITION|DEBUG)")

        elements = mapper.execute(
            load_variability_model(
                Path("calculator") / "variability_model.yaml"
            ), load_code_model(Path("calculator") / "code_model.yaml")
        )

        states = {element.variable_name: element.state for element in elements}
        self.assertEqual(states["CONFIG_ADDITION"], MappingState.USED)
        self.assertEqual(states["CONFIG_SUBTRACTION"], MappingState.UNUSED)

    @run_in_test_environment()
    def test_default_config_accepts_all(self):
        self.assertIsNone(ProblemSolutionSpaceMapper().variable_regex)
