"""
Integration: compile the generated conversion functions together with the scanned header
and run a small driver that checks the round-trip and integer validation behaviour.
Skipped when no C++17 compiler is on PATH.
"""
import os
import shutil
import subprocess
import pytest
from enum_generators.enum_strings_generator import CppEnumStringsGenerator
from enum_scanner import scan_enum_file

CXX = os.environ.get("CXX") or shutil.which("c++") or shutil.which("g++") or shutil.which("clang++")

pytestmark = pytest.mark.skipif(not CXX, reason="no C++ compiler available")

COLOR_HPP = """#pragma once

#include <cstdint>

namespace a {
namespace b {

enum class Color : std::uint8_t {
  Red,
  Green,
  // gap in the values
  Blue = 4,
};

} // namespace b
} // namespace a
"""

COLOR_MAIN = """#include "a/b/Color.hpp"

#include <string>
#include <string_view>
#include <type_traits>

namespace a {
namespace b {
std::string to_string(Color x);
bool from_string(std::string_view in, Color& out);
bool from_integer(std::underlying_type_t<Color> in, Color& out);
} // namespace b
} // namespace a

int main() {
  using namespace a::b;
  int failures = 0;
  Color c = Color::Red;
  if (to_string(Color::Green) != "Green") ++failures;
  if (to_string(static_cast<Color>(3)) != "???") ++failures;
  if (!from_string("Blue", c) || c != Color::Blue) ++failures;
  if (!from_string("Red", c) || c != Color::Red) ++failures;
  if (from_string("Purple", c) || c != Color::Red) ++failures;
  if (!from_integer(1, c) || c != Color::Green) ++failures;
  if (!from_integer(4, c) || c != Color::Blue) ++failures;
  if (from_integer(3, c) || c != Color::Blue) ++failures;
  return failures;
}
"""

SHADE_HPP = """#pragma once

namespace gfx {

enum Shade {
  Light = 1,
  Dark = 2,
};

} // namespace gfx
"""

SHADE_MAIN = """#include "gfx/Shade.hpp"

#include <string>
#include <string_view>
#include <type_traits>

namespace gfx {
std::string to_string(Shade x);
bool from_string(std::string_view in, Shade& out);
bool from_integer(std::underlying_type_t<Shade> in, Shade& out);
} // namespace gfx

int main() {
  using namespace gfx;
  int failures = 0;
  Shade s = Light;
  if (to_string(Dark) != "Dark") ++failures;
  if (!from_string("Dark", s) || s != Dark) ++failures;
  if (from_string("dark", s)) ++failures;
  if (!from_integer(1, s) || s != Light) ++failures;
  if (from_integer(0, s)) ++failures;
  return failures;
}
"""


def build_and_run(temp_dir, header_rel_path, header_text, main_text):
    header_path = os.path.join(temp_dir, header_rel_path)
    os.makedirs(os.path.dirname(header_path), exist_ok=True)
    with open(header_path, "w", encoding="utf-8") as f:
        f.write(header_text)
    result = scan_enum_file(header_path)
    generated_path = os.path.join(temp_dir, "generated.cpp")
    with open(generated_path, "w", encoding="utf-8") as f:
        f.write(CppEnumStringsGenerator(result).generate_source())
    main_path = os.path.join(temp_dir, "main.cpp")
    with open(main_path, "w", encoding="utf-8") as f:
        f.write(main_text)
    exe_path = os.path.join(temp_dir, "driver")
    compile_cmd = [CXX, "-std=c++17", "-I", temp_dir, generated_path, main_path, "-o", exe_path]
    proc = subprocess.run(compile_cmd, capture_output=True, text=True)
    assert proc.returncode == 0, f"Compilation failed:\n{proc.stderr}"
    run = subprocess.run([exe_path], capture_output=True, text=True)
    return run.returncode


def test_enum_class_round_trip(temp_dir):
    failures = build_and_run(temp_dir, os.path.join("a", "b", "Color.hpp"), COLOR_HPP, COLOR_MAIN)
    assert failures == 0, f"{failures} checks failed in the generated Color conversions"


def test_plain_enum_round_trip(temp_dir):
    failures = build_and_run(temp_dir, os.path.join("gfx", "Shade.hpp"), SHADE_HPP, SHADE_MAIN)
    assert failures == 0, f"{failures} checks failed in the generated Shade conversions"
