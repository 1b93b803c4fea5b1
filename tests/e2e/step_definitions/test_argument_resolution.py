"""Step definitions for argument resolution scenarios."""

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest
from pytest_bdd import given, parsers, scenarios, then, when


# Helper functions
def extract_json_from_output(stdout):
    """Extract and parse JSON from command output."""
    lines = stdout.split("\n")
    json_lines = []
    in_json = False

    for line in lines:
        if line.strip().startswith("{"):
            in_json = True
        if in_json:
            json_lines.append(line)
        if in_json and line.rstrip() == "}":
            break

    if json_lines:
        return json.loads("\n".join(json_lines))
    return None


# Load scenarios from the feature file
scenarios("../features/argument_resolution.feature")


@pytest.fixture
def project_root():
    """Get the directory `python -m src.main` runs from."""
    return Path(__file__).parent.parent.parent.parent


@pytest.fixture
def fixtures_dir():
    """Get the path to test fixtures directory."""
    return Path(__file__).parent.parent / "fixtures"


@pytest.fixture
def command_result():
    """Store the result of running a command."""
    return {}


@pytest.fixture
def env_vars():
    """Store environment variables for the test."""
    return {}


@pytest.fixture
def command_args():
    """Store command arguments being built."""
    return [sys.executable, "-m", "src.main"]


@pytest.fixture
def temp_config_file(tmp_path):
    """Store the path of a config file written by a step."""
    return {"path": tmp_path / "config.yaml"}


# Given steps
@given(parsers.parse('I set environment variable "{var_name}" to "{var_value}"'))
def set_environment_variable(env_vars, var_name, var_value):
    """Set an environment variable for the test."""
    env_vars[var_name] = var_value


@given("I have a config file with content:")
def create_temp_config_file(temp_config_file, docstring):
    """Write the given content into a temporary config file."""
    temp_config_file["path"].write_text(docstring)


# When steps
@when(parsers.parse('I run main.py with args "{args}"'))
def run_main_with_args(command_args, args):
    """Set up command to run main.py with only command line arguments."""
    command_args.extend(args.split())


@when(parsers.parse('I run main.py with config file "{config_file}" and args "{args}"'))
def run_main_with_config_and_args(command_args, fixtures_dir, config_file, args):
    """Set up command to run main.py with a config file and extra arguments."""
    command_args.extend(["--config", str(fixtures_dir / config_file)])
    command_args.extend(args.split())


@when(parsers.re(r'I run main.py with config file "(?P<config_file>[^"]+)"$'))
def run_main_with_config_file(command_args, fixtures_dir, config_file):
    """Set up command to run main.py with a config file."""
    command_args.extend(["--config", str(fixtures_dir / config_file)])


@when("I run main.py with this config file")
def run_main_with_temp_config_file(command_args, temp_config_file):
    """Set up command to run main.py with the temporary config file."""
    command_args.extend(["--config", str(temp_config_file["path"])])


@when("I use the print-config-and-exit flag")
def add_print_config_and_exit_flag(
    project_root, command_args, command_result, env_vars
):
    """Add the print-config-and-exit flag and execute the command."""
    command_args.append("--print-config-and-exit")

    env = {
        key: value
        for key, value in os.environ.items()
        if not key.startswith("SHIM_LOGGER_")
    }
    env.update(env_vars)

    try:
        result = subprocess.run(
            command_args,
            capture_output=True,
            text=True,
            timeout=10,
            cwd=project_root,
            env=env,
        )
    except subprocess.TimeoutExpired:
        pytest.fail("Command timed out")

    command_result["returncode"] = result.returncode
    command_result["stdout"] = result.stdout
    command_result["stderr"] = result.stderr


# Then steps
@then(parsers.parse("the exit code must be {code:d}"))
def check_exit_code(command_result, code):
    """Check the exit code of the command."""
    assert command_result["returncode"] == code, (
        f"Expected exit code {code}, got {command_result['returncode']}. "
        f"stdout: {command_result['stdout']}, stderr: {command_result['stderr']}"
    )


@then(parsers.parse('the log must contain: "{expected_text}"'))
def check_log_contains_text(command_result, expected_text):
    """Check that the output contains the expected text."""
    combined_output = command_result["stdout"] + command_result["stderr"]
    assert expected_text in combined_output, (
        f"Expected text '{expected_text}' not found in output. "
        f"stdout: {command_result['stdout']}, stderr: {command_result['stderr']}"
    )


@then(parsers.parse('the config must contain "{key}" with value "{expected_value}"'))
def check_config_value(command_result, key, expected_value):
    """Check a value of the printed configuration."""
    config_data = extract_json_from_output(command_result["stdout"])
    if config_data is None:
        pytest.fail(f"No JSON config found in stdout: {command_result['stdout']}")

    actual_value = str(config_data.get(key, ""))
    assert actual_value == expected_value, (
        f"Expected {key}='{expected_value}', got {key}='{actual_value}'. "
        f"Full config: {config_data}"
    )
