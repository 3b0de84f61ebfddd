# wellness/db/mongo.py
import logging

from pymongo import MongoClient, ASCENDING, DESCENDING
from pymongo.errors import CollectionInvalid

from ..core.config import settings

log = logging.getLogger(__name__)

_client = None
_db = None

# Campos que existen en cualquier versión del esquema de "assessments".
# Con ASSESSMENTS_STRICT_SCHEMA=true el validador rechaza todo lo demás
# (equivale a una base sin la migración de columnas de IA).
MINIMAL_ASSESSMENT_FIELDS = (
    "_id", "student_id", "responses", "risk_level", "ai_analysis",
    "anxiety_score", "depression_score", "stress_score", "overall_wellbeing_score",
    "created_at",
)


def connect_to_mongo():
    """
    Conecta a Mongo y crea índices. Lee MONGO_URI y MONGO_DB de settings.
    Se llama en startup (lifespan) y es SINCRÓNICO.
    """
    global _client, _db
    if _client:
        return _db

    _client = MongoClient(settings.MONGO_URI, uuidRepresentation="standard")
    _db = _client[settings.MONGO_DB]

    if settings.ASSESSMENTS_STRICT_SCHEMA:
        _create_strict_assessments(_db)

    # ---- ÍNDICES ----

    # users: email único
    _db.users.create_index("email", unique=True)

    # students: un perfil por usuario
    _db.students.create_index("user_id", unique=True)

    # health_professionals: un perfil por usuario; directorio por aprobación
    _db.health_professionals.create_index("user_id", unique=True)
    _db.health_professionals.create_index([("is_approved", ASCENDING), ("full_name", ASCENDING)])

    # assessments: historial por estudiante
    _db.assessments.create_index([("student_id", ASCENDING), ("created_at", DESCENDING)])

    # resources: búsqueda por solapamiento de tags
    _db.resources.create_index("tags")

    # journal / appointments: consulta por dueño + fecha
    _db.journal_entries.create_index([("student_id", ASCENDING), ("created_at", DESCENDING)])
    _db.appointments.create_index([("student_id", ASCENDING), ("appointment_date", ASCENDING)])
    _db.appointments.create_index([("health_professional_id", ASCENDING), ("appointment_date", ASCENDING)])

    log.info("MongoDB conectado (db=%s)", settings.MONGO_DB)
    return _db


def _create_strict_assessments(db) -> None:
    validator = {
        "$jsonSchema": {
            "bsonType": "object",
            "required": ["student_id", "responses", "risk_level"],
            "properties": {name: {} for name in MINIMAL_ASSESSMENT_FIELDS},
            "additionalProperties": False,
        }
    }
    try:
        db.create_collection("assessments", validator=validator)
    except CollectionInvalid:
        # ya existe: se respeta el validador que tenga
        pass


def disconnect_from_mongo():
    """
    Cierra la conexión. Si la DB se llama student_wellness_test_*, la borra.
    """
    global _client, _db
    if _client:
        dbname = settings.MONGO_DB
        if dbname.startswith("student_wellness_test_"):
            _client.drop_database(dbname)
        _client.close()
    _client = None
    _db = None


def get_db():
    if _db is None:
        raise RuntimeError("MongoDB no inicializado. Llama connect_to_mongo() en startup.")
    return _db
