"""
질문 은행 (Question Bank) + 류 라우터 (Chapter Router)

분류 기준(재질/구조/기능)은 개별 류보다 류 계열 단위로 공유되므로
류 코드 → 질문 계열(QuestionFamily) → 순서 있는 질문 목록 구조로 관리한다.

- 섬유: 50-63류
- 기계/전기기기: 84-85류
- 식품: 01-04, 07-12, 16-21류
- 화학: 28-35, 38류
- 금속: 72-76, 78-83류
- 차량: 87류
- 일반(fallback): 전용 계열이 없는 류, 후보 0건
"""

import json
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from .types import Question, QuestionOption, QuestionType, ShortCircuit


class QuestionBankError(ValueError):
    """질문 은행 무결성 오류 (중복 id, 선택지 오류 등)"""


class QuestionFamily(str, Enum):
    """질문 계열"""
    TEXTILE = "textile"
    MACHINE = "machine"
    FOOD = "food"
    CHEMICAL = "chemical"
    METAL = "metal"
    VEHICLE = "vehicle"
    GENERAL = "general"


def _opts(*pairs: Tuple[str, str]) -> Tuple[QuestionOption, ...]:
    return tuple(QuestionOption(value=v, label=l) for v, l in pairs)


# ============================================================
# 계열별 질문 정의
# ============================================================

TEXTILE_QUESTIONS: Tuple[Question, ...] = (
    Question(
        id="q_textile_composition",
        label="Quelle est la matière principale du textile (>50% du poids)?",
        type=QuestionType.SELECT,
        options=_opts(
            ("coton", "Coton"),
            ("polyester", "Polyester"),
            ("laine", "Laine"),
            ("soie", "Soie naturelle"),
            ("lin", "Lin"),
            ("synthetique_autre", "Autre synthétique (nylon, acrylique)"),
            ("melange", "Mélange équilibré"),
        ),
        chapter_hints=("50", "51", "52", "53", "54", "55", "56",
                       "57", "58", "59", "60", "61", "62", "63"),
        priority=1,
        short_circuit=ShortCircuit.MATERIAL_KNOWN,
    ),
    Question(
        id="q_textile_construction",
        label="Comment le textile est-il fabriqué?",
        type=QuestionType.SELECT,
        options=_opts(
            ("tricote", "Tricoté (maille, jersey)"),
            ("tisse", "Tissé (chaîne et trame)"),
            ("non_tisse", "Non-tissé (feutre, intissé)"),
            ("dentelle", "Dentelle ou broderie"),
        ),
        chapter_hints=("60", "61", "62"),
        priority=2,
    ),
    Question(
        id="q_textile_usage",
        label="Quel est l'usage principal du produit?",
        type=QuestionType.SELECT,
        options=_opts(
            ("vetement_dessus", "Vêtement de dessus (veste, pantalon)"),
            ("vetement_dessous", "Sous-vêtement ou lingerie"),
            ("accessoire", "Accessoire (écharpe, cravate)"),
            ("linge_maison", "Linge de maison (draps, serviettes)"),
            ("technique", "Usage technique/industriel"),
        ),
        chapter_hints=("61", "62", "63"),
        priority=3,
    ),
)

MACHINE_QUESTIONS: Tuple[Question, ...] = (
    Question(
        id="q_machine_function",
        label="Quelle est la fonction principale de cette machine?",
        type=QuestionType.TEXT,
        chapter_hints=("84", "85"),
        priority=1,
    ),
    Question(
        id="q_machine_type",
        label="Quel type de machine est-ce?",
        type=QuestionType.SELECT,
        options=_opts(
            ("production", "Machine de production industrielle"),
            ("bureau", "Machine de bureau"),
            ("menager", "Appareil ménager"),
            ("agricole", "Machine agricole"),
            ("construction", "Machine de construction"),
        ),
        chapter_hints=("84",),
        priority=2,
    ),
    Question(
        id="q_machine_electric",
        label="La machine fonctionne-t-elle principalement à l'électricité?",
        type=QuestionType.YESNO,
        chapter_hints=("84", "85"),
        priority=3,
    ),
    Question(
        id="q_machine_autonomous",
        label="La machine fonctionne-t-elle de manière autonome ou fait-elle partie d'un ensemble?",
        type=QuestionType.SELECT,
        options=_opts(
            ("autonome", "Fonctionne de manière autonome"),
            ("partie", "Partie/composant d'une machine plus grande"),
            ("accessoire", "Accessoire interchangeable"),
        ),
        chapter_hints=("84", "85"),
        priority=4,
    ),
)

FOOD_QUESTIONS: Tuple[Question, ...] = (
    Question(
        id="q_food_state",
        label="Dans quel état est le produit alimentaire?",
        type=QuestionType.SELECT,
        options=_opts(
            ("vivant", "Vivant"),
            ("frais", "Frais/réfrigéré"),
            ("congele", "Congelé"),
            ("seche", "Séché"),
            ("conserve", "En conserve/préparé"),
        ),
        chapter_hints=("01", "02", "03", "04", "05", "06", "07", "08",
                       "09", "10", "11", "12", "16", "19", "20", "21"),
        priority=1,
    ),
    Question(
        id="q_food_preparation",
        label="Le produit contient-il du sucre ajouté, des arômes ou des additifs?",
        type=QuestionType.YESNO,
        chapter_hints=("17", "18", "19", "20", "21"),
        priority=2,
    ),
    Question(
        id="q_food_origin",
        label="Quelle est l'origine du produit?",
        type=QuestionType.SELECT,
        options=_opts(
            ("animal", "Origine animale"),
            ("vegetal", "Origine végétale"),
            ("mixte", "Mixte (animal et végétal)"),
        ),
        chapter_hints=("01", "02", "03", "04", "07", "08", "09", "10", "11", "12"),
        priority=3,
    ),
)

CHEMICAL_QUESTIONS: Tuple[Question, ...] = (
    Question(
        id="q_chemical_purity",
        label="Le produit chimique est-il à l'état pur ou est-ce un mélange?",
        type=QuestionType.SELECT,
        options=_opts(
            ("pur", "Produit chimiquement défini (pur)"),
            ("melange", "Mélange/préparation"),
            ("technique", "Qualité technique (pureté partielle)"),
        ),
        chapter_hints=("28", "29", "30", "31", "32", "33", "34",
                       "35", "36", "37", "38"),
        priority=1,
    ),
    Question(
        id="q_chemical_usage",
        label="Quelle est la destination d'usage du produit?",
        type=QuestionType.SELECT,
        options=_opts(
            ("industriel", "Usage industriel"),
            ("pharmaceutique", "Usage pharmaceutique/médical"),
            ("cosmetique", "Usage cosmétique"),
            ("agricole", "Usage agricole (engrais, pesticides)"),
            ("alimentaire", "Additif alimentaire"),
            ("domestique", "Usage domestique"),
        ),
        chapter_hints=("28", "29", "30", "31", "32", "33", "34", "35", "38"),
        priority=2,
    ),
)

METAL_QUESTIONS: Tuple[Question, ...] = (
    Question(
        id="q_metal_type",
        label="Quel est le métal principal?",
        type=QuestionType.SELECT,
        options=_opts(
            ("fer_acier", "Fer ou acier"),
            ("fonte", "Fonte"),
            ("acier_inox", "Acier inoxydable"),
            ("aluminium", "Aluminium"),
            ("cuivre", "Cuivre ou alliages (laiton, bronze)"),
            ("zinc", "Zinc"),
            ("plomb", "Plomb"),
            ("precieux", "Métal précieux (or, argent, platine)"),
        ),
        chapter_hints=("72", "73", "74", "75", "76", "78", "79",
                       "80", "81", "82", "83"),
        priority=1,
    ),
    Question(
        id="q_metal_form",
        label="Sous quelle forme se présente le produit métallique?",
        type=QuestionType.SELECT,
        options=_opts(
            ("brut", "Brut (lingot, billette)"),
            ("semifini", "Semi-fini (tôle, fil, tube)"),
            ("ouvrage", "Article ouvré/fini"),
            ("dechet", "Déchet ou débris"),
        ),
        chapter_hints=("72", "73", "74", "75", "76"),
        priority=2,
    ),
)

VEHICLE_QUESTIONS: Tuple[Question, ...] = (
    Question(
        id="q_vehicle_type",
        label="Quel type de véhicule est-ce?",
        type=QuestionType.SELECT,
        options=_opts(
            ("voiture", "Voiture de tourisme"),
            ("utilitaire", "Véhicule utilitaire/camion"),
            ("moto", "Motocycle/scooter"),
            ("velo", "Vélo/cycle"),
            ("remorque", "Remorque"),
            ("agricole", "Véhicule agricole/tracteur"),
        ),
        chapter_hints=("87",),
        priority=1,
    ),
    Question(
        id="q_vehicle_capacity",
        label="Quelle est la cylindrée ou capacité du moteur?",
        type=QuestionType.SELECT,
        options=_opts(
            ("moins_1000", "Moins de 1000 cm³"),
            ("1000_1500", "1000 à 1500 cm³"),
            ("1500_3000", "1500 à 3000 cm³"),
            ("plus_3000", "Plus de 3000 cm³"),
            ("electrique", "Moteur électrique"),
            ("sans_moteur", "Sans moteur"),
        ),
        chapter_hints=("87",),
        priority=2,
    ),
)

# 류 무관 일반 질문 (fallback)
GENERAL_QUESTIONS: Tuple[Question, ...] = (
    Question(
        id="q_general_description",
        label="Décrivez le produit en détail (matière, fonction, composition)",
        type=QuestionType.TEXT,
        priority=10,
    ),
    Question(
        id="q_general_usage",
        label="Quel est l'usage principal prévu pour ce produit?",
        type=QuestionType.TEXT,
        priority=11,
    ),
    Question(
        id="q_general_material",
        label="De quelle(s) matière(s) est composé le produit?",
        type=QuestionType.TEXT,
        priority=12,
    ),
)

FAMILY_QUESTIONS: Mapping[QuestionFamily, Tuple[Question, ...]] = MappingProxyType({
    QuestionFamily.TEXTILE: TEXTILE_QUESTIONS,
    QuestionFamily.MACHINE: MACHINE_QUESTIONS,
    QuestionFamily.FOOD: FOOD_QUESTIONS,
    QuestionFamily.CHEMICAL: CHEMICAL_QUESTIONS,
    QuestionFamily.METAL: METAL_QUESTIONS,
    QuestionFamily.VEHICLE: VEHICLE_QUESTIONS,
    QuestionFamily.GENERAL: GENERAL_QUESTIONS,
})


# ============================================================
# 류 → 계열 매핑
# ============================================================

def _route(family: QuestionFamily, *chapters: str) -> Dict[str, QuestionFamily]:
    return {ch: family for ch in chapters}


CHAPTER_FAMILY: Mapping[str, QuestionFamily] = MappingProxyType({
    **_route(QuestionFamily.TEXTILE, *[f"{n:02d}" for n in range(50, 64)]),
    **_route(QuestionFamily.MACHINE, "84", "85"),
    **_route(QuestionFamily.FOOD, "01", "02", "03", "04", "07", "08", "09", "10",
             "11", "12", "16", "17", "18", "19", "20", "21"),
    **_route(QuestionFamily.CHEMICAL, "28", "29", "30", "31", "32", "33", "34", "35", "38"),
    **_route(QuestionFamily.METAL, "72", "73", "74", "75", "76", "78", "79", "80",
             "81", "82", "83"),
    **_route(QuestionFamily.VEHICLE, "87"),
})


def family_for_chapter(chapter: str) -> Optional[QuestionFamily]:
    """류 코드의 질문 계열 (전용 계열 없으면 None)"""
    return CHAPTER_FAMILY.get(chapter)


def lookup_questions_for_chapter(chapter: str) -> Tuple[Question, ...]:
    """
    류 코드에 해당하는 질문 목록

    Args:
        chapter: 2자리 류 코드 ("61", "84" 등)

    Returns:
        계열 질문 목록 (모르는 류면 빈 튜플)
    """
    family = family_for_chapter(chapter)
    if family is None:
        return ()
    return FAMILY_QUESTIONS[family]


def general_questions() -> Tuple[Question, ...]:
    return GENERAL_QUESTIONS


def all_questions() -> List[Question]:
    """은행 전체 질문 (계열 순서 → 계열 내 순서)"""
    questions = []
    for family_questions in FAMILY_QUESTIONS.values():
        questions.extend(family_questions)
    return questions


def validate_bank(questions: List[Question]) -> None:
    """
    질문 은행 무결성 검증

    - id 전역 유일
    - select 질문은 선택지가 있어야 하고 value가 질문 내에서 유일
    - select가 아닌 질문은 선택지 없음

    Raises:
        QuestionBankError
    """
    seen_ids = set()
    for q in questions:
        if q.id in seen_ids:
            raise QuestionBankError(f"중복 질문 id: {q.id}")
        seen_ids.add(q.id)

        values = q.option_values()
        if q.type == QuestionType.SELECT:
            if not values:
                raise QuestionBankError(f"선택지 없음: {q.id}")
            if len(set(values)) != len(values):
                raise QuestionBankError(f"중복 선택지 value: {q.id}")
        elif values:
            raise QuestionBankError(f"{q.type.value} 질문에 선택지 지정됨: {q.id}")


# 모듈 로드 시 1회 검증
validate_bank(all_questions())


# ============================================================
# JSONL 내보내기/불러오기 (kb/structured)
# ============================================================

def export_question_bank(output_path: str) -> int:
    """
    질문 은행을 JSONL로 저장 (한 줄 = 질문 1개, family 포함)

    Returns:
        저장한 질문 수
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    count = 0
    with open(path, 'w', encoding='utf-8') as f:
        for family, questions in FAMILY_QUESTIONS.items():
            for q in questions:
                item = {"family": family.value, **q.to_dict()}
                f.write(json.dumps(item, ensure_ascii=False) + '\n')
                count += 1

    print(f"[QuestionBank] 저장: {count}개 질문 -> {path}")
    return count


def load_question_bank(input_path: str) -> Dict[QuestionFamily, Tuple[Question, ...]]:
    """
    JSONL 질문 은행 로드 (export_question_bank 형식)

    Raises:
        QuestionBankError: 무결성 위반 시
    """
    grouped: Dict[QuestionFamily, List[Question]] = {}
    with open(input_path, 'r', encoding='utf-8') as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            item = json.loads(line)
            family = QuestionFamily(item.pop('family', QuestionFamily.GENERAL.value))
            grouped.setdefault(family, []).append(Question.from_dict(item))

    loaded = {family: tuple(qs) for family, qs in grouped.items()}
    validate_bank([q for qs in loaded.values() for q in qs])

    print(f"[QuestionBank] 로드: {sum(len(qs) for qs in loaded.values())}개 질문 ({input_path})")
    return loaded
