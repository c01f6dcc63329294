import pytest

from bobatcal.models import Shop, Drink
from tests.conftest import make_user, make_shop, make_drink, login


class TestListShops:
    def test_alphabetical(self, client, app):
        make_shop('Yi Fang')
        make_shop('Boba Guys')
        make_shop('Molly Tea')

        response = client.get('/shops')
        assert response.status_code == 200
        assert [s['name'] for s in response.get_json()] == ['Boba Guys', 'Molly Tea', 'Yi Fang']

    def test_empty(self, client, app):
        assert client.get('/shops').get_json() == []


class TestCreateShop:
    def test_requires_session(self, client, app):
        response = client.post('/shops', json={'name': 'Tiger Sugar', 'address': '2 Oak Ave'})
        assert response.status_code == 401
        assert Shop.query.count() == 0

    def test_requires_admin(self, client, user):
        login(client, user)
        response = client.post('/shops', json={'name': 'Tiger Sugar', 'address': '2 Oak Ave'})
        assert response.status_code == 403
        assert Shop.query.count() == 0

    def test_create_and_fetch(self, client, admin):
        login(client, admin)
        response = client.post('/shops', json={
            'name': 'Tiger Sugar',
            'address': '2 Oak Ave',
            'city': 'San Jose',
            'zipCode': '95112',
        })

        assert response.status_code == 201
        created = response.get_json()
        assert created['name'] == 'Tiger Sugar'
        assert created['zipCode'] == '95112'

        fetched = client.get(f"/shops/{created['id']}")
        assert fetched.status_code == 200
        assert fetched.get_json()['address'] == '2 Oak Ave'
        assert fetched.get_json()['city'] == 'San Jose'

    def test_optional_fields_default_to_null(self, client, admin):
        login(client, admin)
        response = client.post('/shops', json={
            'name': 'Tiger Sugar',
            'address': '2 Oak Ave',
            'city': '',
        })

        data = response.get_json()
        assert data['city'] is None
        assert data['zipCode'] is None
        assert data['placeId'] is None

    @pytest.mark.parametrize('body, field', [
        ({'name': '', 'address': '2 Oak Ave'}, 'name'),
        ({'name': '   ', 'address': '2 Oak Ave'}, 'name'),
        ({'address': '2 Oak Ave'}, 'name'),
        ({'name': 'Tiger Sugar', 'address': ''}, 'address'),
        ({'name': 'Tiger Sugar'}, 'address'),
    ])
    def test_rejects_missing_name_or_address(self, client, admin, body, field):
        login(client, admin)
        response = client.post('/shops', json=body)

        assert response.status_code == 400
        assert field in [d['field'] for d in response.get_json()['details']]
        assert Shop.query.count() == 0

    def test_rejects_non_json(self, client, admin):
        login(client, admin)
        response = client.post('/shops', data='name=Tiger', content_type='text/plain')
        assert response.status_code == 400

    def test_duplicate_place_id(self, client, admin):
        make_shop('Tiger Sugar', google_place_id='ChIJ123')
        login(client, admin)
        response = client.post('/shops', json={
            'name': 'Tiger Sugar 2',
            'address': '3 Oak Ave',
            'placeId': 'ChIJ123',
        })

        assert response.status_code == 400
        assert response.get_json()['details'][0]['field'] == 'placeId'
        assert Shop.query.count() == 1


class TestGetShop:
    def test_not_found(self, client, app):
        response = client.get('/shops/123')
        assert response.status_code == 404
        assert response.get_json()['error'] == 'Shop not found'


class TestListDrinks:
    def test_empty_menu_is_not_an_error(self, client, shop):
        response = client.get(f'/shops/{shop.id}/drinks')
        assert response.status_code == 200
        assert response.get_json() == []

    def test_unknown_shop(self, client, app):
        assert client.get('/shops/77/drinks').status_code == 404

    def test_alphabetical_with_aggregates(self, client, shop):
        taro = make_drink(shop, 'Taro Milk Tea')
        make_drink(shop, 'Jasmine Green Tea')
        mango = make_drink(shop, 'Mango Slush')
        other_shop = make_shop('Elsewhere')
        make_drink(other_shop, 'Another Tea')

        for name, drink, value in [('Ann', taro, 5), ('Ben', taro, 3), ('Cat', taro, 4), ('Ann2', mango, 2)]:
            login(client, make_user(name))
            client.post(f'/drinks/{drink.id}/ratings', json={'ratingValue': value})

        drinks = client.get(f'/shops/{shop.id}/drinks').get_json()
        assert [d['name'] for d in drinks] == ['Jasmine Green Tea', 'Mango Slush', 'Taro Milk Tea']

        by_name = {d['name']: d for d in drinks}
        assert by_name['Taro Milk Tea']['averageRating'] == 4.0
        assert by_name['Taro Milk Tea']['ratingCount'] == 3
        assert by_name['Mango Slush']['averageRating'] == 2.0
        assert by_name['Jasmine Green Tea']['averageRating'] is None
        assert by_name['Jasmine Green Tea']['ratingCount'] == 0


class TestCreateDrink:
    def test_requires_admin(self, client, user, shop):
        login(client, user)
        response = client.post(f'/shops/{shop.id}/drinks', json={'name': 'Oolong'})
        assert response.status_code == 403
        assert Drink.query.count() == 0

    def test_requires_session(self, client, shop):
        assert client.post(f'/shops/{shop.id}/drinks', json={'name': 'Oolong'}).status_code == 401

    def test_create(self, client, admin, shop):
        login(client, admin)
        response = client.post(f'/shops/{shop.id}/drinks', json={'name': 'Oolong'})

        assert response.status_code == 201
        data = response.get_json()
        assert data['name'] == 'Oolong'
        assert data['shopId'] == shop.id

    def test_unknown_shop(self, client, admin):
        login(client, admin)
        response = client.post('/shops/999/drinks', json={'name': 'Oolong'})
        assert response.status_code == 404
        assert Drink.query.count() == 0

    def test_empty_name(self, client, admin, shop):
        login(client, admin)
        response = client.post(f'/shops/{shop.id}/drinks', json={'name': ''})
        assert response.status_code == 400
        assert Drink.query.count() == 0
