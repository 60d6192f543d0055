"""
数学函数 - 多项式、三角函数、指数函数、对数函数

函数族是封闭的，用 FunctionKind 标记类型，参数保存在不可变的元组里，
按类型查表求值。
"""
from dataclasses import dataclass
from enum import Enum

import numpy as np

from plot_errors import InvalidArgument


class FunctionKind(Enum):
    POLYNOMIAL = "polynomial"
    TRIGONOMETRIC = "trigonometric"
    EXPONENTIAL = "exponential"
    LOGARITHMIC = "logarithmic"


TRIG_KINDS = ("sin", "cos")

# 各类函数的参数名称，菜单提示也用这里的顺序
PARAMETER_NAMES = {
    FunctionKind.POLYNOMIAL: ("coefficients",),
    FunctionKind.TRIGONOMETRIC: ("amplitude", "frequency", "phase"),
    FunctionKind.EXPONENTIAL: ("coefficient", "base"),
    FunctionKind.LOGARITHMIC: ("a", "base", "c"),
}

TITLES = {
    FunctionKind.POLYNOMIAL: "Polynomial Function",
    FunctionKind.TRIGONOMETRIC: "Trigonometric Function",
    FunctionKind.EXPONENTIAL: "Exponential Function",
    FunctionKind.LOGARITHMIC: "Logarithmic Function",
}


def _evaluate_polynomial(params, variant, x):
    result = np.float64(0.0)
    for power, coeff in enumerate(params):
        result += coeff * np.power(x, power)
    return result


def _evaluate_trigonometric(params, variant, x):
    amplitude, frequency, phase = params
    if variant == "sin":
        return amplitude * np.sin(frequency * x + phase)
    elif variant == "cos":
        return amplitude * np.cos(frequency * x + phase)
    return 0.0  # 未知类型


def _evaluate_exponential(params, variant, x):
    coefficient, base = params
    return coefficient * np.power(base, x)


def _evaluate_logarithmic(params, variant, x):
    a, base, c = params
    if x <= 0:
        raise InvalidArgument(f"Logarithm is undefined for x <= 0 (x = {x:g}).")
    # 换底公式
    return a * np.log(x) / np.log(base) + c


EVALUATORS = {
    FunctionKind.POLYNOMIAL: _evaluate_polynomial,
    FunctionKind.TRIGONOMETRIC: _evaluate_trigonometric,
    FunctionKind.EXPONENTIAL: _evaluate_exponential,
    FunctionKind.LOGARITHMIC: _evaluate_logarithmic,
}


def _polynomial_formula(params, variant):
    if not params:
        return "0"
    terms = []
    for power, coeff in enumerate(params):
        if power == 0:
            term = f"{abs(coeff):g}"
        elif power == 1:
            term = f"{abs(coeff):g}x"
        else:
            term = f"{abs(coeff):g}x^{power}"
        if not terms:
            terms.append(term if coeff >= 0 else f"-{term}")
        else:
            terms.append(f"{'+' if coeff >= 0 else '-'} {term}")
    return " ".join(terms)


def _trigonometric_formula(params, variant):
    amplitude, frequency, phase = params
    return f"{amplitude:g}*{variant or '?'}({frequency:g}x + {phase:g})"


def _exponential_formula(params, variant):
    coefficient, base = params
    return f"{coefficient:g}*{base:g}^x"


def _logarithmic_formula(params, variant):
    a, base, c = params
    return f"{a:g}*log_{base:g}(x) + {c:g}"


FORMULAS = {
    FunctionKind.POLYNOMIAL: _polynomial_formula,
    FunctionKind.TRIGONOMETRIC: _trigonometric_formula,
    FunctionKind.EXPONENTIAL: _exponential_formula,
    FunctionKind.LOGARITHMIC: _logarithmic_formula,
}


@dataclass(frozen=True)
class MathFunction:
    """参数化的实函数，只读，求值没有副作用"""
    kind: FunctionKind
    params: tuple
    variant: str = ""

    def evaluate(self, x):
        """计算 f(x)"""
        x = np.float64(x)
        # 退化参数（如负底数）静默得到 nan/inf
        with np.errstate(all='ignore'):
            y = EVALUATORS[self.kind](self.params, self.variant, x)
        return float(y)

    def formula(self):
        return FORMULAS[self.kind](self.params, self.variant)

    def describe(self):
        """返回可读的函数描述"""
        return f"{TITLES[self.kind]}: y = {self.formula()}"

    def with_params(self, *values):
        """用新参数构造同类函数"""
        values = [float(v) for v in values]
        if self.kind == FunctionKind.POLYNOMIAL:
            return polynomial(values)
        expected = len(PARAMETER_NAMES[self.kind])
        if len(values) != expected:
            names = ", ".join(PARAMETER_NAMES[self.kind])
            raise InvalidArgument(
                f"{TITLES[self.kind]} takes {expected} parameters ({names}), got {len(values)}."
            )
        if self.kind == FunctionKind.TRIGONOMETRIC:
            return trigonometric(self.variant, *values)
        elif self.kind == FunctionKind.EXPONENTIAL:
            return exponential(*values)
        return logarithmic(*values)


def polynomial(coefficients):
    """多项式，系数按次数从低到高排列"""
    return MathFunction(FunctionKind.POLYNOMIAL, tuple(float(c) for c in coefficients))


def trigonometric(kind, amplitude, frequency, phase):
    return MathFunction(
        FunctionKind.TRIGONOMETRIC,
        (float(amplitude), float(frequency), float(phase)),
        variant=kind,
    )


def sine(amplitude=1.0, frequency=1.0, phase=0.0):
    return trigonometric("sin", amplitude, frequency, phase)


def cosine(amplitude=1.0, frequency=1.0, phase=0.0):
    return trigonometric("cos", amplitude, frequency, phase)


def exponential(coefficient, base):
    return MathFunction(FunctionKind.EXPONENTIAL, (float(coefficient), float(base)))


def logarithmic(a, base, c):
    """对数函数 a*log_base(x) + c，底数必须大于1"""
    if not base > 1.0:
        raise InvalidArgument(f"Base of logarithm must be greater than 1 (got {base:g}).")
    return MathFunction(FunctionKind.LOGARITHMIC, (float(a), float(base), float(c)))
