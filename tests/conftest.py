import pytest

from bobatcal import create_app, db
from bobatcal.models import User, Role, Shop, Drink


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def make_user(name='Alice', role=Role.USER):
    user = User(
        name=name,
        image=f'https://img.example/{name.lower()}.png',
        role=role,
        provider='google',
        provider_account_id=f'acct-{name.lower()}',
    )
    db.session.add(user)
    db.session.commit()
    return user


def make_shop(name='Tea Top', address='1 Main St', **kwargs):
    shop = Shop(name=name, address=address, **kwargs)
    db.session.add(shop)
    db.session.commit()
    return shop


def make_drink(shop, name='Brown Sugar Milk Tea'):
    drink = Drink(name=name, shop_id=shop.id)
    db.session.add(drink)
    db.session.commit()
    return drink


def login(client, user):
    with client.session_transaction() as sess:
        sess['user_id'] = user.id


@pytest.fixture
def user(app):
    return make_user('Alice')


@pytest.fixture
def admin(app):
    return make_user('Root', role=Role.ADMIN)


@pytest.fixture
def shop(app):
    return make_shop()


@pytest.fixture
def drink(shop):
    return make_drink(shop)
