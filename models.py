from flask_restx import fields


class Models:
    def __init__(self, api):
        self.api = api

        self.product_model = api.model('Product', {
            'id': fields.Integer(readonly=True, description='The product ID'),
            'title': fields.String(required=True, description='The product title'),
            'description': fields.String(description='The product description'),
            'price': fields.Float(required=True, description='Unit price'),
            'discountPercentage': fields.Float(description='Discount, 0-100'),
            'rating': fields.Float(description='Average rating, 0-5'),
            'stock': fields.Integer(description='Units in stock'),
            'brand': fields.String(description='Brand (absent for unbranded goods)'),
            'category': fields.String(description='Category slug'),
            'thumbnail': fields.String(description='Thumbnail URL'),
            'images': fields.List(fields.String, description='Image URLs'),
        })

        self.products_response_model = api.model('ProductsResponse', {
            'products': fields.List(fields.Nested(self.product_model)),
            'total': fields.Integer(description='Matching products across all pages'),
            'skip': fields.Integer(description='Offset echoed from the request'),
            'limit': fields.Integer(description='Page size echoed from the request'),
        })

        self.category_model = api.model('Category', {
            'slug': fields.String(required=True, description='Category identifier'),
            'name': fields.String(required=True, description='Display name'),
            'url': fields.String(required=True, description='Listing URL for the category'),
        })

        self.deleted_product_model = api.inherit('DeletedProduct', self.product_model, {
            'isDeleted': fields.Boolean(description='Always true for a delete result'),
            'deletedOn': fields.String(description='ISO-8601 deletion timestamp'),
        })

        self.error_model = api.model('Error', {
            'message': fields.String(description='Why the request failed'),
        })
