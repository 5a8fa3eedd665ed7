"""
errors.py - 혈액형 엔진 예외 정의
"""


class BloodGroupError(Exception):
    """엔진 예외의 기본 클래스"""


class UnknownPhenotype(BloodGroupError, ValueError):
    """
    해당 혈액형 체계의 표현형 목록에 없는 입력
    - system: BloodGroupSystem
    - phenotype: 입력된 원본 값
    """

    def __init__(self, system, phenotype):
        self.system = system
        self.phenotype = phenotype
        system_name = getattr(system, 'value', system)
        super().__init__(f"{system_name} 체계에 없는 표현형: {phenotype!r}")


# 외부 인터페이스에서 쓰는 이름
InvalidPhenotype = UnknownPhenotype


class InternalConsistencyError(BloodGroupError, RuntimeError):
    """대립유전자 표와 표현형 결정 규칙이 서로 맞지 않음 (프로그램 결함)"""

    def __init__(self, system, alleles):
        self.system = system
        self.alleles = tuple(alleles)
        system_name = getattr(system, 'value', system)
        super().__init__(
            f"{system_name} 체계에서 처리할 수 없는 대립유전자 조합: {self.alleles!r}"
        )
