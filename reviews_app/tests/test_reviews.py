from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from establishments_app.models import Establishment

from ..models import Review

User = get_user_model()


def make_user(email, role='USER', name='Test User'):
    return User.objects.create_user(username=email, email=email, password='secret123',
                                    name=name, role=role)


def make_establishment(owner, name='Mercado Inclusivo'):
    return Establishment.objects.create(
        owner=owner,
        name=name,
        category=Establishment.Category.STORE,
        city='Curitiba',
        state='PR',
        latitude=-25.4284,
        longitude=-49.2733,
    )


# ====================================================================
# CLASS 1: Tests on an empty database
# ====================================================================
class ReviewAPINoDataTests(APITestCase):
    """
    Test suite for the Review API endpoints when the database is empty.
    """

    def test_anonymous_user_gets_empty_list(self):
        """
        The review list is public; with no reviews it answers 200 with an empty page.
        """
        response = self.client.get(reverse('review-list'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['reviews'], [])
        self.assertEqual(response.data['pagination']['total'], 0)

    def test_anonymous_user_cannot_create_review(self):
        response = self.client.post(reverse('review-list'), {}, format='json')

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data['error'], 'Unauthorized')

    def test_stats_of_unknown_establishment_is_not_found(self):
        url = reverse(
            'review-establishment-stats',
            kwargs={'establishment_id': '00000000-0000-0000-0000-000000000000'},
        )
        response = self.client.get(url)

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


# ====================================================================
# CLASS 2: Tests on a populated database
# ====================================================================
class ReviewAPIWithDataTests(APITestCase):
    """
    Test suite for listing, filtering and statistics when reviews exist.
    """

    def setUp(self):
        """
        Two establishments and three reviewers:
        - `market` is reviewed by alice (5), bob (3) and carol (4).
        - `pharmacy` is reviewed by alice (2).
        """
        self.owner = make_user('owner@example.com', role='OWNER')
        self.alice = make_user('alice@example.com', name='Alice')
        self.bob = make_user('bob@example.com', name='Bob')
        self.carol = make_user('carol@example.com', name='Carol')
        self.market = make_establishment(self.owner)
        self.pharmacy = make_establishment(self.owner, name='Farmácia da Esquina')

        Review.objects.create(establishment=self.market, user=self.alice, rating=5,
                              title='Ótimo', comment='Rampa e banheiro adaptado.')
        Review.objects.create(establishment=self.market, user=self.bob, rating=3)
        Review.objects.create(establishment=self.market, user=self.carol, rating=4)
        Review.objects.create(establishment=self.pharmacy, user=self.alice, rating=2)

    def test_filter_by_establishment(self):
        response = self.client.get(reverse('review-list'), {'establishmentId': self.market.id})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['reviews']), 3)
        for review in response.data['reviews']:
            self.assertEqual(review['establishmentId'], str(self.market.id))

    def test_filter_by_user(self):
        response = self.client.get(reverse('review-list'), {'userId': self.alice.id})

        self.assertEqual(len(response.data['reviews']), 2)
        self.assertEqual(response.data['reviews'][0]['author']['name'], 'Alice')

    def test_filter_by_rating_range_is_inclusive(self):
        response = self.client.get(reverse('review-list'), {'minRating': 3, 'maxRating': 4})

        self.assertEqual(sorted(r['rating'] for r in response.data['reviews']), [3, 4])

    def test_invalid_rating_filter_is_rejected(self):
        response = self.client.get(reverse('review-list'), {'minRating': 9})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Validation Error')

    def test_list_is_paginated(self):
        response = self.client.get(reverse('review-list'), {'limit': 3, 'page': 2})

        self.assertEqual(len(response.data['reviews']), 1)
        self.assertEqual(
            response.data['pagination'],
            {'page': 2, 'limit': 3, 'total': 4, 'totalPages': 2},
        )

    def test_review_embeds_author_and_establishment(self):
        review = Review.objects.get(user=self.alice, establishment=self.market)
        response = self.client.get(reverse('review-detail', kwargs={'pk': review.pk}))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['title'], 'Ótimo')
        self.assertEqual(response.data['author'], {
            'id': str(self.alice.id), 'name': 'Alice', 'avatarUrl': None,
        })
        self.assertEqual(response.data['establishment']['name'], 'Mercado Inclusivo')
        self.assertEqual(response.data['establishment']['category'], 'STORE')
        self.assertNotIn('email', response.data['author'])

    def test_establishment_stats(self):
        url = reverse('review-establishment-stats', kwargs={'establishment_id': self.market.id})
        response = self.client.get(url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['totalReviews'], 3)
        self.assertEqual(response.data['averageRating'], 4.0)
        self.assertEqual(response.data['ratingDistribution'], {1: 0, 2: 0, 3: 1, 4: 1, 5: 1})

    def test_stats_of_establishment_without_reviews(self):
        quiet = make_establishment(self.owner, name='Loja Nova')
        url = reverse('review-establishment-stats', kwargs={'establishment_id': quiet.id})
        response = self.client.get(url)

        self.assertEqual(response.data, {
            'totalReviews': 0,
            'averageRating': 0,
            'ratingDistribution': {1: 0, 2: 0, 3: 0, 4: 0, 5: 0},
        })

    def test_my_reviews_lists_only_the_callers_reviews(self):
        self.client.force_authenticate(user=self.alice)
        response = self.client.get(reverse('review-my-reviews'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['reviews']), 2)
        for review in response.data['reviews']:
            self.assertEqual(review['userId'], str(self.alice.id))

    def test_my_reviews_requires_authentication(self):
        response = self.client.get(reverse('review-my-reviews'))

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


# ====================================================================
# CLASS 3: Creating reviews
# ====================================================================
class ReviewCreateTests(APITestCase):
    """
    Covers the creation checks in order: establishment exists, one review per user and
    establishment, then the insert.
    """

    def setUp(self):
        self.owner = make_user('owner@example.com', role='OWNER')
        self.user = make_user('reviewer@example.com')
        self.establishment = make_establishment(self.owner)
        self.url = reverse('review-list')
        self.payload = {
            'establishmentId': str(self.establishment.id),
            'rating': 4,
            'title': 'Boa acessibilidade',
            'comment': 'Corredores largos.',
        }

    def test_create_review(self):
        self.client.force_authenticate(user=self.user)
        response = self.client.post(self.url, self.payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['rating'], 4)
        self.assertEqual(response.data['userId'], str(self.user.id))
        self.assertEqual(Review.objects.filter(user=self.user).count(), 1)

    def test_author_is_always_the_caller(self):
        other = make_user('other@example.com')
        self.client.force_authenticate(user=self.user)
        payload = dict(self.payload, userId=str(other.id))
        response = self.client.post(self.url, payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['userId'], str(self.user.id))

    def test_unknown_establishment_is_not_found(self):
        self.client.force_authenticate(user=self.user)
        payload = dict(self.payload, establishmentId='00000000-0000-0000-0000-000000000000')
        response = self.client.post(self.url, payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertFalse(Review.objects.exists())

    def test_rating_out_of_range_is_rejected(self):
        self.client.force_authenticate(user=self.user)
        for rating in (0, 6):
            response = self.client.post(self.url, dict(self.payload, rating=rating), format='json')
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
            self.assertIn('rating', response.data['details'])

    def test_second_review_by_same_user_conflicts(self):
        Review.objects.create(establishment=self.establishment, user=self.user, rating=5)
        self.client.force_authenticate(user=self.user)
        response = self.client.post(self.url, self.payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data['error'], 'Conflict')
        self.assertIn('PUT', response.data['message'])
        self.assertEqual(Review.objects.filter(user=self.user).count(), 1)

    def test_second_review_conflicts_when_check_is_raced(self):
        """
        Simulates a concurrent submission that passed the lookup: the unique constraint rejects
        the insert and the API still answers 409 with the same message.
        """
        Review.objects.create(establishment=self.establishment, user=self.user, rating=5)
        self.client.force_authenticate(user=self.user)
        with patch('reviews_app.services._has_reviewed', return_value=False):
            response = self.client.post(self.url, self.payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertIn('PUT', response.data['message'])
        self.assertEqual(Review.objects.filter(user=self.user).count(), 1)


# ====================================================================
# CLASS 4: Updating and deleting reviews
# ====================================================================
class ReviewUpdateDeleteTests(APITestCase):
    """Only the author or an ADMIN may change or delete a review."""

    def setUp(self):
        self.owner = make_user('owner@example.com', role='OWNER')
        self.author = make_user('author@example.com')
        self.stranger = make_user('stranger@example.com')
        self.admin = make_user('admin@example.com', role='ADMIN')
        self.establishment = make_establishment(self.owner)
        self.review = Review.objects.create(establishment=self.establishment, user=self.author,
                                            rating=2, comment='Sem rampa.')
        self.url = reverse('review-detail', kwargs={'pk': self.review.pk})

    def test_author_can_update(self):
        self.client.force_authenticate(user=self.author)
        response = self.client.put(self.url, {'rating': 4, 'comment': 'Instalaram a rampa.'},
                                   format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.review.refresh_from_db()
        self.assertEqual(self.review.rating, 4)
        self.assertEqual(self.review.comment, 'Instalaram a rampa.')

    def test_establishment_and_author_are_immutable(self):
        other = make_establishment(self.owner, name='Outro Mercado')
        self.client.force_authenticate(user=self.author)
        response = self.client.patch(
            self.url,
            {'establishmentId': str(other.id), 'userId': str(self.stranger.id), 'rating': 3},
            format='json',
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.review.refresh_from_db()
        self.assertEqual(self.review.establishment, self.establishment)
        self.assertEqual(self.review.user, self.author)
        self.assertEqual(self.review.rating, 3)

    def test_admin_can_update(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.patch(self.url, {'rating': 1}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_stranger_cannot_update(self):
        self.client.force_authenticate(user=self.stranger)
        response = self.client.patch(self.url, {'rating': 5}, format='json')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.review.refresh_from_db()
        self.assertEqual(self.review.rating, 2)

    def test_establishment_owner_cannot_update_review(self):
        self.client.force_authenticate(user=self.owner)
        response = self.client.patch(self.url, {'rating': 5}, format='json')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_author_can_delete(self):
        self.client.force_authenticate(user=self.author)
        response = self.client.delete(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('message', response.data)
        self.assertFalse(Review.objects.filter(pk=self.review.pk).exists())

    def test_admin_can_delete(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.delete(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_stranger_cannot_delete(self):
        self.client.force_authenticate(user=self.stranger)
        response = self.client.delete(self.url)

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertTrue(Review.objects.filter(pk=self.review.pk).exists())

    def test_unknown_review_is_not_found(self):
        self.client.force_authenticate(user=self.admin)
        url = reverse('review-detail', kwargs={'pk': '00000000-0000-0000-0000-000000000000'})
        response = self.client.delete(url)

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


# ====================================================================
# CLASS 5: End-to-end scenario
# ====================================================================
class ReviewScoreScenarioTests(APITestCase):

    def test_scores_follow_reviews_through_the_api(self):
        """
        An owner registers an establishment, two users review it with 5 and 4, the score reads
        4.5, and a second review by the first user is refused with 409.
        """
        owner = make_user('owner@example.com', role='OWNER')
        alice = make_user('alice@example.com')
        bob = make_user('bob@example.com')

        self.client.force_authenticate(user=owner)
        response = self.client.post(reverse('establishment-list'), {
            'name': 'Livraria Acessível',
            'city': 'Recife',
            'state': 'PE',
            'latitude': -8.0476,
            'longitude': -34.8770,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        establishment_id = response.data['id']

        for user, rating in ((alice, 5), (bob, 4)):
            self.client.force_authenticate(user=user)
            response = self.client.post(reverse('review-list'), {
                'establishmentId': establishment_id,
                'rating': rating,
            }, format='json')
            self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        response = self.client.get(
            reverse('establishment-detail', kwargs={'pk': establishment_id})
        )
        self.assertEqual(response.data['accessibilityScore'], 4.5)
        self.assertEqual(response.data['reviewCount'], 2)

        self.client.force_authenticate(user=alice)
        response = self.client.post(reverse('review-list'), {
            'establishmentId': establishment_id,
            'rating': 1,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
