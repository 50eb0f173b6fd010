from app.models.image_model import Image
from app.db import db

def add_image(filename, content_type, data, image_type=None, related_id=None):
    image = Image(
        filename=filename,
        content_type=content_type,
        data=data,
        type=image_type,
        related_id=related_id
    )
    db.session.add(image)
    db.session.commit()
    return image


def get_by_id(image_id: int):
    return db.session.get(Image, image_id)


def find_images(image_type=None, related_id=None):
    query = Image.query
    if image_type is not None:
        query = query.filter(Image.type == image_type)
    if related_id is not None:
        query = query.filter(Image.related_id == related_id)
    return query.order_by(Image.created_at.asc(), Image.id.asc()).all()
