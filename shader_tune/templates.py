"""
Starter fragment shaders for new buffers.

All templates target the OpenGL preview: GLSL 330, a single `out vec4
f_color`, and the uniforms the preview sets (u_time, u_mouse, u_resolution,
u_scale).
"""

import textwrap

from shader_tune.config import TemplateCategory


class ShaderTemplate:
    def __init__(self, name, description, category, source):
        self.name = name
        self.description = description
        self.category = category
        self.source = textwrap.dedent(source).lstrip()

    def __repr__(self):
        return f"ShaderTemplate({self.name!r})"


SOLID = ShaderTemplate(
    "Solid Color", "Simple solid color fragment shader", TemplateCategory.FRAGMENT,
    '''
    #version 330
    out vec4 f_color;

    void main() {
        f_color = vec4(1.0, 0.5, 0.2, 1.0);
    }
    ''')

GRADIENT = ShaderTemplate(
    "Gradient", "Animated color gradient", TemplateCategory.FRAGMENT,
    '''
    #version 330
    uniform vec2 u_resolution;
    uniform float u_time;
    out vec4 f_color;

    void main() {
        vec2 uv = gl_FragCoord.xy / u_resolution;

        float r = 0.5 + 0.5 * sin(uv.x * 3.0 + u_time);
        float g = 0.5 + 0.5 * sin(uv.y * 3.0 + u_time * 0.7);
        float b = 0.5 + 0.5 * cos(length(uv - 0.5) * 5.0 - u_time);

        f_color = vec4(r, g, b, 1.0);
    }
    ''')

MOUSE_SPOT = ShaderTemplate(
    "Mouse Spotlight", "Soft light that follows the pointer", TemplateCategory.FRAGMENT,
    '''
    #version 330
    uniform vec2 u_resolution;
    uniform vec2 u_mouse;
    uniform float u_scale;
    out vec4 f_color;

    void main() {
        vec2 frag = gl_FragCoord.xy / u_scale;
        vec2 mouse = vec2(u_mouse.x, u_resolution.y / u_scale - u_mouse.y);
        float d = distance(frag, mouse) / u_resolution.y;
        float light = smoothstep(0.35, 0.0, d);
        f_color = vec4(vec3(light), 1.0);
    }
    ''')

NOISE = ShaderTemplate(
    "Value Noise", "Procedural value noise pattern", TemplateCategory.PATTERN,
    '''
    #version 330
    uniform vec2 u_resolution;
    uniform float u_time;
    out vec4 f_color;

    float hash(vec2 p) {
        p = fract(p * vec2(123.34, 456.21));
        p += dot(p, p + 45.32);
        return fract(p.x * p.y);
    }

    float noise(vec2 p) {
        vec2 i = floor(p);
        vec2 f = fract(p);
        f = f * f * (3.0 - 2.0 * f);

        float a = hash(i);
        float b = hash(i + vec2(1.0, 0.0));
        float c = hash(i + vec2(0.0, 1.0));
        float d = hash(i + vec2(1.0, 1.0));

        return mix(mix(a, b, f.x), mix(c, d, f.x), f.y);
    }

    void main() {
        vec2 uv = gl_FragCoord.xy / u_resolution * 8.0;
        float n = noise(uv + u_time);
        f_color = vec4(vec3(n), 1.0);
    }
    ''')

PLASMA = ShaderTemplate(
    "Plasma", "Layered sine plasma", TemplateCategory.PATTERN,
    '''
    #version 330
    uniform vec2 u_resolution;
    uniform float u_time;
    out vec4 f_color;

    void main() {
        vec2 uv = (gl_FragCoord.xy / u_resolution - 0.5) * 2.0;
        uv.x *= u_resolution.x / u_resolution.y;
        uv *= 5.0;

        float v = 0.0;
        for (float i = 1.0; i <= 4.0; i++) {
            v += sin(uv.x * i + u_time) + sin(uv.y * i + u_time);
            uv = mat2(cos(i), -sin(i), sin(i), cos(i)) * uv;
        }

        vec3 col = 0.5 + 0.5 * cos(v * 3.14 + u_time + vec3(0, 2, 4));
        f_color = vec4(col, 1.0);
    }
    ''')

FRACTAL = ShaderTemplate(
    "Fractal Rings", "Iterated palette rings with rotation", TemplateCategory.COMPLETE,
    '''
    #version 330
    uniform vec2 u_resolution;
    uniform float u_time;
    out vec4 f_color;

    vec3 palette(float t) {
        vec3 a = vec3(0.5, 0.5, 0.5);
        vec3 b = vec3(0.5, 0.5, 0.5);
        vec3 c = vec3(1.0, 1.0, 1.0);
        vec3 d = vec3(0.263, 0.416, 0.557);
        return a + b * cos(6.28318 * (c * t + d));
    }

    mat2 rotate2d(float angle) {
        return mat2(cos(angle), -sin(angle), sin(angle), cos(angle));
    }

    void main() {
        vec2 uv = (gl_FragCoord.xy * 2.0 - u_resolution.xy) / u_resolution.y;
        uv *= rotate2d(u_time * 0.1);

        vec2 uv0 = uv;
        vec3 finalColor = vec3(0.0);

        for (float i = 0.0; i < 4.0; i++) {
            uv = fract(uv * 1.5) - 0.5;
            float d = length(uv) * exp(-length(uv0));
            vec3 col = palette(length(uv0) + i * 0.4 + u_time * 0.4);
            d = sin(d * 8.0 + u_time) / 8.0;
            d = abs(d);
            d = pow(0.01 / d, 1.2);
            finalColor += col * d;
        }

        f_color = vec4(finalColor, 1.0);
    }
    ''')

ALL_TEMPLATES = (SOLID, GRADIENT, MOUSE_SPOT, NOISE, PLASMA, FRACTAL)


def templates_by_category():
    grouped = {category: [] for category in TemplateCategory}
    for template in ALL_TEMPLATES:
        grouped[template.category].append(template)
    return grouped


def get_template(name):
    for template in ALL_TEMPLATES:
        if template.name.lower() == name.lower():
            return template
    raise KeyError(f"Template '{name}' does not exist.")
