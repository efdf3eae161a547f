"""
Static keyword databases used by the completion engine.

Each language exposes one immutable, ordered tuple of CompletionItem covering
keywords, types, built-in functions (with $N placeholder snippets) and
attribute tokens. Item text is unique within a database.
"""

from shader_tune.config import CompletionKind
from shader_tune.models import CompletionItem


def _items(kind, rows):
    return tuple(CompletionItem(row[0], kind, row[1], row[2] if len(row) > 2 else None) for row in rows)


# Metal Shading Language

METAL_KEYWORDS = _items(CompletionKind.KEYWORD, [
    # function qualifiers
    ("kernel", "Compute kernel function qualifier"),
    ("vertex", "Vertex shader function qualifier"),
    ("fragment", "Fragment shader function qualifier"),
    # address spaces
    ("constant", "Constant address space qualifier"),
    ("device", "Device address space qualifier"),
    ("threadgroup", "Threadgroup address space qualifier"),
    ("threadgroup_imageblock", "Threadgroup imageblock address space"),
    # type qualifiers
    ("const", "Constant type qualifier"),
    ("constexpr", "Constant expression"),
    ("static", "Static storage qualifier"),
    ("volatile", "Volatile type qualifier"),
    # control flow
    ("if", "Conditional statement"),
    ("else", "Alternative conditional branch"),
    ("switch", "Switch statement"),
    ("case", "Case label"),
    ("default", "Default case label"),
    ("for", "For loop"),
    ("while", "While loop"),
    ("do", "Do-while loop"),
    ("break", "Break statement"),
    ("continue", "Continue statement"),
    ("return", "Return statement"),
    ("discard_fragment", "Discard current fragment"),
    ("namespace", "Namespace declaration"),
    ("using", "Using directive"),
    ("struct", "Structure type"),
    ("enum", "Enumeration type"),
    ("typedef", "Type definition"),
])

_METAL_SCALARS = [
    ("bool", "boolean"), ("char", "char"), ("uchar", "uchar"), ("short", "short"),
    ("ushort", "ushort"), ("int", "int"), ("uint", "uint"), ("half", "half"), ("float", "float"),
]

METAL_TYPES = _items(CompletionKind.TYPE, [
    ("void", "Void type"),
    ("bool", "Boolean type"),
    ("char", "8-bit signed integer"),
    ("uchar", "8-bit unsigned integer"),
    ("short", "16-bit signed integer"),
    ("ushort", "16-bit unsigned integer"),
    ("int", "32-bit signed integer"),
    ("uint", "32-bit unsigned integer"),
    ("half", "16-bit floating point"),
    ("float", "32-bit floating point"),
    *[(f"{name}{n}", f"{n}-component {label} vector") for n in (2, 3, 4) for name, label in _METAL_SCALARS],
    ("packed_float3", "Packed 3-component float vector"),
    ("packed_float4", "Packed 4-component float vector"),
    ("packed_half3", "Packed 3-component half vector"),
    ("packed_half4", "Packed 4-component half vector"),
    *[(f"float{c}x{r}", f"{c}x{r} float matrix") for c in (2, 3, 4) for r in (2, 3, 4)],
    ("texture1d", "1D texture"),
    ("texture1d_array", "1D texture array"),
    ("texture2d", "2D texture"),
    ("texture2d_array", "2D texture array"),
    ("texture2d_ms", "2D multisample texture"),
    ("texture3d", "3D texture"),
    ("texturecube", "Cube texture"),
    ("texturecube_array", "Cube texture array"),
    ("depth2d", "2D depth texture"),
    ("depth2d_array", "2D depth texture array"),
    ("depthcube", "Cube depth texture"),
    ("sampler", "Texture sampler"),
    ("samplerstate", "Sampler state"),
])

# built-ins shared by both languages, same names and arity
_SHARED_FUNCTIONS = [
    ("abs", "Absolute value", "abs($0)"),
    ("acos", "Arc cosine", "acos($0)"),
    ("asin", "Arc sine", "asin($0)"),
    ("atan", "Arc tangent", "atan($0)"),
    ("ceil", "Round up to nearest integer", "ceil($0)"),
    ("clamp", "Clamp value between min and max", "clamp($0, $1, $2)"),
    ("cos", "Cosine", "cos($0)"),
    ("cross", "Cross product", "cross($0, $1)"),
    ("degrees", "Convert radians to degrees", "degrees($0)"),
    ("distance", "Distance between two points", "distance($0, $1)"),
    ("dot", "Dot product", "dot($0, $1)"),
    ("exp", "Exponential function", "exp($0)"),
    ("exp2", "Base-2 exponential", "exp2($0)"),
    ("faceforward", "Orient normal to face viewer", "faceforward($0, $1, $2)"),
    ("floor", "Round down to nearest integer", "floor($0)"),
    ("fract", "Fractional part", "fract($0)"),
    ("length", "Vector length", "length($0)"),
    ("log", "Natural logarithm", "log($0)"),
    ("log2", "Base-2 logarithm", "log2($0)"),
    ("max", "Maximum value", "max($0, $1)"),
    ("min", "Minimum value", "min($0, $1)"),
    ("mix", "Linear interpolation", "mix($0, $1, $2)"),
    ("normalize", "Normalize vector", "normalize($0)"),
    ("pow", "Power function", "pow($0, $1)"),
    ("radians", "Convert degrees to radians", "radians($0)"),
    ("reflect", "Reflect vector", "reflect($0, $1)"),
    ("refract", "Refract vector", "refract($0, $1, $2)"),
    ("round", "Round to nearest integer", "round($0)"),
    ("sign", "Sign of value", "sign($0)"),
    ("sin", "Sine", "sin($0)"),
    ("smoothstep", "Smooth interpolation", "smoothstep($0, $1, $2)"),
    ("sqrt", "Square root", "sqrt($0)"),
    ("step", "Step function", "step($0, $1)"),
    ("tan", "Tangent", "tan($0)"),
    ("trunc", "Truncate to integer", "trunc($0)"),
]

METAL_FUNCTIONS = _items(CompletionKind.FUNCTION, sorted([
    *_SHARED_FUNCTIONS,
    ("atan2", "Arc tangent of y/x", "atan2($0, $1)"),
    ("fma", "Fused multiply-add", "fma($0, $1, $2)"),
    ("fmax", "Maximum value", "fmax($0, $1)"),
    ("fmin", "Minimum value", "fmin($0, $1)"),
    ("fmod", "Floating-point remainder", "fmod($0, $1)"),
    ("rsqrt", "Reciprocal square root", "rsqrt($0)"),
    ("saturate", "Clamp to [0, 1]", "saturate($0)"),
]) + [
    ("sample", "Sample texture", "sample($0, $1)"),
    ("read", "Read from texture", "read($0)"),
    ("write", "Write to texture", "write($0, $1)"),
    ("gather", "Gather texture samples", "gather($0, $1)"),
])

METAL_ATTRIBUTES = _items(CompletionKind.ATTRIBUTE, [
    ("[[stage_in]]", "Vertex function input"),
    ("[[position]]", "Vertex position output"),
    ("[[vertex_id]]", "Vertex ID"),
    ("[[instance_id]]", "Instance ID"),
    ("[[buffer(0)]]", "Buffer argument"),
    ("[[texture(0)]]", "Texture argument"),
    ("[[sampler(0)]]", "Sampler argument"),
    ("[[attribute(0)]]", "Vertex attribute"),
    ("[[color(0)]]", "Fragment color output"),
    ("[[thread_position_in_grid]]", "Thread position in grid"),
    ("[[thread_position_in_threadgroup]]", "Thread position in threadgroup"),
    ("[[threadgroup_position_in_grid]]", "Threadgroup position in grid"),
    ("[[threads_per_threadgroup]]", "Threads per threadgroup"),
])

METAL_COMPLETIONS = METAL_KEYWORDS + METAL_TYPES + METAL_FUNCTIONS + METAL_ATTRIBUTES


# OpenGL Shading Language (330 core)

GLSL_KEYWORDS = _items(CompletionKind.KEYWORD, [
    ("uniform", "Uniform variable qualifier"),
    ("in", "Shader stage input"),
    ("out", "Shader stage output"),
    ("inout", "Input and output parameter"),
    ("const", "Compile-time constant"),
    ("flat", "No interpolation"),
    ("smooth", "Perspective-correct interpolation"),
    ("precision", "Default precision declaration"),
    ("highp", "High precision qualifier"),
    ("mediump", "Medium precision qualifier"),
    ("lowp", "Low precision qualifier"),
    ("if", "Conditional statement"),
    ("else", "Alternative conditional branch"),
    ("switch", "Switch statement"),
    ("case", "Case label"),
    ("default", "Default case label"),
    ("for", "For loop"),
    ("while", "While loop"),
    ("do", "Do-while loop"),
    ("break", "Break statement"),
    ("continue", "Continue statement"),
    ("return", "Return statement"),
    ("discard", "Discard current fragment"),
    ("struct", "Structure type"),
])

GLSL_TYPES = _items(CompletionKind.TYPE, [
    ("void", "Void type"),
    ("bool", "Boolean type"),
    ("int", "32-bit signed integer"),
    ("uint", "32-bit unsigned integer"),
    ("float", "32-bit floating point"),
    *[(f"{prefix}vec{n}", f"{n}-component {label} vector")
      for n in (2, 3, 4) for prefix, label in (("", "float"), ("i", "int"), ("u", "uint"), ("b", "boolean"))],
    *[(f"mat{n}", f"{n}x{n} float matrix") for n in (2, 3, 4)],
    *[(f"mat{c}x{r}", f"{c}x{r} float matrix") for c in (2, 3, 4) for r in (2, 3, 4) if c != r],
    ("sampler1D", "1D texture sampler"),
    ("sampler2D", "2D texture sampler"),
    ("sampler3D", "3D texture sampler"),
    ("samplerCube", "Cube texture sampler"),
    ("sampler2DArray", "2D array texture sampler"),
    ("sampler2DShadow", "2D depth comparison sampler"),
])

GLSL_FUNCTIONS = _items(CompletionKind.FUNCTION, sorted([
    *_SHARED_FUNCTIONS,
    ("inversesqrt", "Reciprocal square root", "inversesqrt($0)"),
    ("mod", "Floating-point remainder", "mod($0, $1)"),
    ("dFdx", "Partial derivative in x", "dFdx($0)"),
    ("dFdy", "Partial derivative in y", "dFdy($0)"),
    ("fwidth", "Sum of absolute derivatives", "fwidth($0)"),
]) + [
    ("texture", "Sample texture", "texture($0, $1)"),
    ("texelFetch", "Fetch a single texel", "texelFetch($0, $1, $2)"),
    ("textureSize", "Texture dimensions", "textureSize($0, $1)"),
])

GLSL_ATTRIBUTES = _items(CompletionKind.ATTRIBUTE, [
    ("layout(location = 0)", "Input or output location"),
    ("layout(binding = 0)", "Texture or buffer binding"),
    ("layout(std140)", "Standard uniform block layout"),
    ("#version 330", "Language version directive"),
    ("gl_FragCoord", "Window-relative fragment coordinate"),
    ("gl_Position", "Vertex clip-space position"),
])

GLSL_COMPLETIONS = GLSL_KEYWORDS + GLSL_TYPES + GLSL_FUNCTIONS + GLSL_ATTRIBUTES

DATABASES = {
    "metal": METAL_COMPLETIONS,
    "glsl": GLSL_COMPLETIONS,
}


def completions_for(language):
    """Returns the completion database for a shading language name."""
    try:
        return DATABASES[language.lower()]
    except KeyError:
        raise ValueError(f"No completion database for language '{language}'") from None
