from .models import FundamentalMatrix, Match, Model, matchesToPoints
